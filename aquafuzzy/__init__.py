"""AquaFuzzy: fuzzy decision support for a water plant and its machines.

Two independent engines:
	control      Mamdani controller, raw water readings -> coagulant dose,
	             flocculation time, pH correction and operating scores
	diagnostics  Fuzzy C-Means over machine sensor points, with risk scoring

The names below are the public entry points of both engines.
"""

__all__ = [
	'run_fuzzy_inference', 'get_membership_degrees',
	'run_fcm', 'analyze_risk', 'interpolate_cluster_color', 'generate_synthetic_data',
	'InvalidInputError', 'VERSION'
]

from .control.inference import run_fuzzy_inference, get_membership_degrees
from .diagnostics.fcm import run_fcm
from .diagnostics.analytics import analyze_risk, interpolate_cluster_color
from .diagnostics.synthetic import generate_synthetic_data
from .diagnostics.types import InvalidInputError

VERSION = '0.1.0'
