"""
Types for Fuzzy C-Means machine diagnostics.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
import numpy as np


class InvalidInputError(ValueError):
    """Input rejected by the diagnostics engine (empty data, k > n, ragged features, ...)."""


@dataclass
class DataPoint:
    """
    Point in feature space (e.g., vibration, temperature, current draw of a machine).

    `features` is frozen into a tuple; only `memberships` and `color` are
    attached after a clustering run.
    """
    id: str
    features: Tuple[float, ...]
    label: Optional[str] = None
    timestamp: Optional[datetime] = None
    memberships: Optional[List[float]] = None
    color: Optional[str] = None

    def __post_init__(self):
        self.features = tuple(float(v) for v in self.features)


@dataclass(frozen=True)
class FCMConfig:
    cluster_count: int = 3
    fuzziness: float = 2.0  # m, standard value in the literature
    max_iterations: int = 100
    tolerance: float = 1e-3  # max membership change to declare convergence
    track_history: bool = True

    def validate(self) -> None:
        if self.cluster_count < 1:
            raise InvalidInputError(f"cluster_count must be >= 1, got {self.cluster_count}")
        if not self.fuzziness > 1:
            raise InvalidInputError(f"fuzziness must be > 1, got {self.fuzziness}")
        if self.max_iterations < 1:
            raise InvalidInputError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if not self.tolerance > 0:
            raise InvalidInputError(f"tolerance must be > 0, got {self.tolerance}")


@dataclass(frozen=True)
class IterationState:
    iteration: int  # 0-indexed
    centroids: np.ndarray  # (k, d)
    membership_matrix: np.ndarray  # (n, k)
    convergence_error: float  # max membership change in this pass
    objective_function: float  # J = Σ Σ μ^m ||x - c||²


@dataclass(frozen=True)
class FCMResult:
    centroids: np.ndarray  # (k, d)
    membership_matrix: np.ndarray  # (n, k), rows sum to 1
    iteration_history: Tuple[IterationState, ...]
    convergence_error: float
    iteration_count: int
    cluster_assignments: np.ndarray  # (n,) argmax per row
    converged: bool


@dataclass(frozen=True)
class ClusterDefinition:
    """Generator recipe for one synthetic machine state."""
    name: str
    center: Sequence[float]
    std_dev: Sequence[float]
    count: int
    color: str


@dataclass(frozen=True)
class RiskAnalysis:
    risk_score: int  # 0-100
    risk_category: str  # low | medium | high | critical
    dominant_cluster: int
    description: str
    recommendation: str
