"""
Post-processing of FCM memberships: risk scoring and display colours.

Risk convention (owned by the caller, not inferred from the data):
clusters are ordered healthiest first and most severe last, so the last
cluster is "failure" and the second-to-last is "alert". FCM seeding is random,
so this only holds when the caller reorders clusters (e.g. by centroid
position) or clusters with a fixed known layout. Nothing here checks it, and
for k != 3 the weighting is a convention, not a calibrated score.
"""

from __future__ import annotations
import re
from typing import List, Optional, Sequence, Tuple

from aquafuzzy.utils.numeric import clamp, round_half_up
from .config import CLUSTER_COLORS, CLUSTER_NAMES
from .types import DataPoint, FCMResult, InvalidInputError, RiskAnalysis

ALERT_WEIGHT = 40
FAILURE_WEIGHT = 100

# (upper bound exclusive, category, recommendation)
RISK_BUCKETS = [
    (20, "low", "Operación normal. Continuar monitoreo estándar."),
    (45, "medium", "Programar inspección preventiva en las próximas semanas."),
    (70, "high", "Requiere inspección urgente. Considerar reducir carga operativa."),
]
CRITICAL = ("critical", "ACCIÓN INMEDIATA: Programar mantenimiento correctivo antes de falla.")

HSL_PATTERN = re.compile(r"hsl\((\d+),\s*(\d+)%,\s*(\d+)%\)")
FALLBACK_HSL = (0, 0, 50)


def dominant_cluster(row: Sequence[float]) -> int:
    """Index of the largest membership (first index wins ties)."""
    best = 0
    for j, value in enumerate(row):
        if value > row[best]:
            best = j
    return best


def risk_score(row: Sequence[float]) -> int:
    """round(40 · μ[second-to-last] + 100 · μ[last]), clamped to [0, 100]."""
    failure_idx = len(row) - 1
    alert_idx = max(len(row) - 2, 0)
    score = round_half_up(row[alert_idx] * ALERT_WEIGHT + row[failure_idx] * FAILURE_WEIGHT)
    return int(clamp(score, 0, 100))


def risk_category(score: int) -> Tuple[str, str]:
    for bound, category, recommendation in RISK_BUCKETS:
        if score < bound:
            return category, recommendation
    return CRITICAL


def analyze_risk(row: Sequence[float], cluster_names: Sequence[str] = CLUSTER_NAMES) -> RiskAnalysis:
    """
    Risk analysis of one point from its membership row.

    Args:
        row: Memberships, healthiest cluster first, most severe last
        cluster_names: Display names (missing names render as C{i})

    Returns:
        RiskAnalysis with score, category, dominant cluster, description and recommendation

    Raises:
        InvalidInputError: empty membership row
    """
    row = [float(v) for v in row]
    if not row:
        raise InvalidInputError("Membership row is empty")

    score = risk_score(row)
    category, recommendation = risk_category(score)

    labels = []
    for i, value in enumerate(row):
        name = cluster_names[i] if i < len(cluster_names) and cluster_names[i] else f"C{i}"
        labels.append(f"{name}: {value * 100:.1f}%")

    return RiskAnalysis(
        risk_score=score,
        risk_category=category,
        dominant_cluster=dominant_cluster(row),
        description="Membresía: " + ", ".join(labels),
        recommendation=recommendation,
    )


def parse_hsl(color) -> Tuple[float, float, float]:
    """'hsl(h, s%, l%)' string or (h, s, l) triple; anything else reads as grey."""
    if isinstance(color, (tuple, list)) and len(color) == 3:
        return float(color[0]), float(color[1]), float(color[2])
    match = HSL_PATTERN.search(color if isinstance(color, str) else "")
    if match:
        return int(match.group(1)), int(match.group(2)), int(match.group(3))
    return FALLBACK_HSL


def interpolate_cluster_color(row: Sequence[float], colors: Sequence[str] = CLUSTER_COLORS) -> str:
    """
    Membership-weighted blend of the cluster colours, channel by channel in HSL.

    A plain linear blend (hue included), not perceptually uniform; good enough
    to show a point drifting between states.
    """
    h = s = l = 0.0
    for value, color in zip(row, colors):
        ch, cs, cl = parse_hsl(color)
        h += ch * value
        s += cs * value
        l += cl * value
    return f"hsl({int(round_half_up(h))}, {int(round_half_up(s))}%, {int(round_half_up(l))}%)"


def annotate_points(
    points: Sequence[DataPoint],
    result: FCMResult,
    colors: Optional[Sequence[str]] = None,
) -> List[DataPoint]:
    """Attach memberships and blended colour to each point after a run."""
    palette = colors if colors is not None else CLUSTER_COLORS
    if len(points) != result.membership_matrix.shape[0]:
        raise InvalidInputError(
            f"Result has {result.membership_matrix.shape[0]} membership rows for {len(points)} points"
        )
    for point, row in zip(points, result.membership_matrix):
        point.memberships = [float(v) for v in row]
        point.color = interpolate_cluster_color(point.memberships, palette)
    return list(points)


__all__ = [
    "analyze_risk", "interpolate_cluster_color", "annotate_points",
    "risk_score", "risk_category", "dominant_cluster", "parse_hsl",
]
