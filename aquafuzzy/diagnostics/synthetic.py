"""
Synthetic machine-sensor data for demonstrations and tests.

Default scenario simulates vibration (x) and temperature (y) readings of a
fleet in three health states; the degradation series follows one machine
sliding from healthy to failing.
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence
import math
import numpy as np

from .config import CLUSTER_COLORS
from .types import ClusterDefinition, DataPoint, InvalidInputError

HISTORY_WINDOW = timedelta(days=30)

DEFAULT_CLUSTER_DEFINITIONS = [
    ClusterDefinition("Normal", center=(25, 45), std_dev=(5, 5), count=60, color=CLUSTER_COLORS[0]),  # low vibration, moderate temperature
    ClusterDefinition("Alerta", center=(55, 60), std_dev=(8, 8), count=30, color=CLUSTER_COLORS[1]),
    ClusterDefinition("Falla Inminente", center=(85, 80), std_dev=(6, 6), count=15, color=CLUSTER_COLORS[2]),
]


def box_muller(rng: np.random.Generator) -> float:
    """One standard normal sample via the Box-Muller transform."""
    u1 = 1.0 - rng.random()  # (0, 1], keeps log() finite
    u2 = rng.random()
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)


def generate_synthetic_data(
    definitions: Sequence[ClusterDefinition] = DEFAULT_CLUSTER_DEFINITIONS,
    rng: Optional[np.random.Generator | int] = None,
    now: Optional[datetime] = None,
) -> List[DataPoint]:
    """
    Gaussian blobs around each definition's centre, shuffled together.

    A std_dev array shorter than the centre reuses std_dev[0] for the missing
    dimensions. Points are labelled with their definition name and stamped
    at a random time within the 30 days before `now`.

    Raises:
        InvalidInputError: a definition with a centre but no std_dev entry
    """
    for cluster in definitions:
        if len(cluster.center) and not len(cluster.std_dev):
            raise InvalidInputError(f"Cluster '{cluster.name}' has no std_dev for its {len(cluster.center)}-d centre")

    rng = np.random.default_rng(rng)
    now = now or datetime.now(timezone.utc)

    data: List[DataPoint] = []
    for cluster in definitions:
        for _ in range(cluster.count):
            features = []
            for dim, c in enumerate(cluster.center):
                sd = cluster.std_dev[dim] if dim < len(cluster.std_dev) else cluster.std_dev[0]
                features.append(c + box_muller(rng) * sd)
            data.append(DataPoint(
                id=f"M{len(data):04d}",
                features=features,
                label=cluster.name,
                timestamp=now - rng.random() * HISTORY_WINDOW,
            ))

    order = rng.permutation(len(data))
    return [data[i] for i in order]


def generate_degradation_data(
    start: Sequence[float],
    end: Sequence[float],
    steps: int,
    machine_id: str = "DEG001",
    rng: Optional[np.random.Generator | int] = None,
    now: Optional[datetime] = None,
) -> List[DataPoint]:
    """
    Time series of one machine drifting from `start` to `end`, one reading per day.

    Each reading is the linear interpolation plus uniform noise in [-1.5, 1.5).
    """
    if steps < 1:
        raise InvalidInputError(f"steps must be >= 1, got {steps}")
    if len(start) != len(end):
        raise InvalidInputError(f"start/end dimensionality mismatch: {len(start)} vs {len(end)}")

    rng = np.random.default_rng(rng)
    now = now or datetime.now(timezone.utc)

    data = []
    for i in range(steps):
        progress = i / (steps - 1) if steps > 1 else 0.0
        features = [
            s + (e - s) * progress + (rng.random() - 0.5) * 3
            for s, e in zip(start, end)
        ]
        data.append(DataPoint(
            id=f"{machine_id}_T{i:03d}",
            features=features,
            label="Degradation",
            timestamp=now - timedelta(days=steps - i),
        ))
    return data


__all__ = [
    "DEFAULT_CLUSTER_DEFINITIONS", "generate_synthetic_data",
    "generate_degradation_data", "box_muller",
]
