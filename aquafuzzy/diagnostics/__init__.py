from .types import InvalidInputError, DataPoint, FCMConfig, IterationState, FCMResult, ClusterDefinition, RiskAnalysis
from .config import DEFAULT_FCM_CONFIG, CLUSTER_COLORS, CLUSTER_NAMES, load_fcm_config
from .fcm import run_fcm
from .analytics import analyze_risk, interpolate_cluster_color, annotate_points
from .synthetic import DEFAULT_CLUSTER_DEFINITIONS, generate_synthetic_data, generate_degradation_data
