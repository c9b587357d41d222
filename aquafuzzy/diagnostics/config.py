"""
Default FCM parameters, display palette, and JSON config loading.
"""
from aquafuzzy.utils.json_io import read_json, safe_get
from .types import FCMConfig

DEFAULT_FCM_CONFIG = FCMConfig(
    cluster_count=3,      # Normal, Alert, Imminent failure
    fuzziness=2.0,
    max_iterations=100,
    tolerance=1e-3,
    track_history=True,   # needed for convergence animation
)

# Machine health palette, healthiest first (up to 5 states)
CLUSTER_COLORS = [
    "hsl(142, 76%, 45%)",  # green - normal operation
    "hsl(45, 93%, 47%)",   # yellow - early warning
    "hsl(25, 95%, 53%)",   # orange - active degradation
    "hsl(0, 84%, 60%)",    # red - severe degradation
    "hsl(330, 80%, 50%)",  # magenta - imminent failure
]

CLUSTER_NAMES = [
    "Normal",
    "Alerta",
    "Precaución",
    "Degradación",
    "Falla Inminente",
]


def load_fcm_config(path: str | None = "data/diagnostics/fcm.json") -> FCMConfig:
    """Load FCM parameters from JSON file, or return defaults."""
    data = read_json(path)
    if data is None:
        return DEFAULT_FCM_CONFIG
    D = DEFAULT_FCM_CONFIG
    return FCMConfig(
        cluster_count=int(safe_get(data, "cluster_count", D.cluster_count)),
        fuzziness=float(safe_get(data, "fuzziness", D.fuzziness)),
        max_iterations=int(safe_get(data, "max_iterations", D.max_iterations)),
        tolerance=float(safe_get(data, "tolerance", D.tolerance)),
        track_history=bool(safe_get(data, "track_history", D.track_history)),
    )
