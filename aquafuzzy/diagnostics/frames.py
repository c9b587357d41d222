"""
pandas adapters around the FCM engine.

- points_from_frame: numeric table (e.g. a sensor export already loaded by
  the import layer) → DataPoint list
- history_frame: convergence trajectory of a run, one row per iteration
- memberships_frame: per-point memberships and dominant cluster
"""

from __future__ import annotations
from typing import List, Optional, Sequence
import numpy as np
import pandas as pd

from .config import CLUSTER_NAMES
from .types import DataPoint, FCMResult, InvalidInputError


def points_from_frame(
    frame: pd.DataFrame,
    feature_columns: Sequence[str],
    id_column: Optional[str] = None,
    label_column: Optional[str] = None,
) -> List[DataPoint]:
    """
    Build data points from numeric DataFrame columns.

    Rows without an id column get ids P0000, P0001, ...

    Raises:
        InvalidInputError: no feature columns, unknown columns, non-numeric
            or non-finite feature values
    """
    if not feature_columns:
        raise InvalidInputError("At least one feature column is required")
    wanted = list(feature_columns) + [c for c in (id_column, label_column) if c]
    missing = [c for c in wanted if c not in frame.columns]
    if missing:
        raise InvalidInputError(f"Columns not found: {missing}")

    try:
        values = frame[list(feature_columns)].apply(pd.to_numeric).to_numpy(dtype=float)
    except (ValueError, TypeError) as e:
        raise InvalidInputError(f"Feature columns must be numeric: {e}") from e
    if not np.all(np.isfinite(values)):
        raise InvalidInputError("Feature columns contain missing or non-finite values")

    points = []
    for i, row in enumerate(values):
        pid = str(frame[id_column].iloc[i]) if id_column else f"P{i:04d}"
        label = frame[label_column].iloc[i] if label_column else None
        points.append(DataPoint(
            id=pid,
            features=row.tolist(),
            label=None if label is None or pd.isna(label) else str(label),
        ))
    return points


def history_frame(result: FCMResult) -> pd.DataFrame:
    """Convergence trajectory (empty frame when history was not tracked)."""
    return pd.DataFrame(
        {
            "iteration": [s.iteration for s in result.iteration_history],
            "convergence_error": [s.convergence_error for s in result.iteration_history],
            "objective_function": [s.objective_function for s in result.iteration_history],
        },
        columns=["iteration", "convergence_error", "objective_function"],
    )


def memberships_frame(
    points: Sequence[DataPoint],
    result: FCMResult,
    cluster_names: Sequence[str] = CLUSTER_NAMES,
) -> pd.DataFrame:
    """One row per point: id, label, one membership column per cluster, dominant cluster."""
    n, k = result.membership_matrix.shape
    if len(points) != n:
        raise InvalidInputError(f"Result has {n} membership rows for {len(points)} points")
    names = [cluster_names[j] if j < len(cluster_names) else f"C{j}" for j in range(k)]
    df = pd.DataFrame(result.membership_matrix, columns=names)
    df.insert(0, "label", [p.label for p in points])
    df.insert(0, "id", [p.id for p in points])
    df["dominant_cluster"] = np.asarray(result.cluster_assignments, dtype=int)
    return df


__all__ = ["points_from_frame", "history_frame", "memberships_frame"]
