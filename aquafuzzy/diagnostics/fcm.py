"""
Fuzzy C-Means (FCM) clustering for predictive machine diagnostics.

Unlike K-Means, every point holds a degree of membership in every cluster.
Machines do not jump from "Normal" to "Failure": a unit drifting towards a
fault reads e.g. 80% Normal / 20% Alert, then 50/40/10, then 10/20/70. FCM
captures that gradual transition.

Algorithm (Bezdek):
    1. Seed k centroids with k distinct input points (Forgy), memberships 1/k
    2. Membership update:

                        1
           μij = ─────────────────────
                 Σl (dij / dil)^(2/(m-1))

       a point lying exactly on a centroid gets hard membership 1 there
    3. Centroid update:  cj = Σi μij^m · xi / Σi μij^m
    4. Stop when max |μij(t) - μij(t-1)| < tolerance, or after max_iterations

Worst-case cost is bounded by max_iterations: O(max_iterations · n · k · d)
for distances and centroids, plus O(n · k²) per pass for the ratio sums.

API Usage:
    >>> result = run_fcm(points, FCMConfig(cluster_count=3), rng=42)
    >>> result.converged, result.iteration_count
    >>> result.membership_matrix[0]   # e.g., [0.81, 0.15, 0.04]
"""

from __future__ import annotations
from typing import List, Optional, Sequence
import logging
import numpy as np

from .config import DEFAULT_FCM_CONFIG
from .types import DataPoint, FCMConfig, FCMResult, InvalidInputError, IterationState

logger = logging.getLogger(__name__)


def _frozen(a: np.ndarray) -> np.ndarray:
    """Read-only copy, so snapshots and results cannot be altered afterwards."""
    out = np.array(a, dtype=float, copy=True)
    out.flags.writeable = False
    return out


def feature_matrix(points: Sequence[DataPoint]) -> np.ndarray:
    """
    Stack point features into an (n, d) matrix.

    Raises:
        InvalidInputError: empty input, empty or mismatched feature vectors,
            non-finite values, magnitudes that overflow distances or sums
    """
    if len(points) == 0:
        raise InvalidInputError("No data points to cluster")
    dims = {len(p.features) for p in points}
    if len(dims) != 1:
        raise InvalidInputError(f"Feature dimensionality mismatch across points: {sorted(dims)}")
    if 0 in dims:
        raise InvalidInputError("Data points have empty feature vectors")
    X = np.asarray([p.features for p in points], dtype=float)
    if not np.all(np.isfinite(X)):
        raise InvalidInputError("Data points contain non-finite feature values")
    # bounds every squared distance and centroid weighted sum
    with np.errstate(over="ignore"):
        span = X.max(axis=0) - X.min(axis=0)
        bounds = X.shape[0] * np.array([np.sum(span * span), np.max(np.abs(X))])
    if not np.all(np.isfinite(bounds)):
        raise InvalidInputError("Feature values are too large for float distances; rescale the features")
    return X


def euclidean_distances(X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """D[i, j] = ||X_i - centroid_j||, shape (n, k)."""
    diff = X[:, None, :] - centroids[None, :, :]
    return np.sqrt(np.sum(diff * diff, axis=2))


def update_memberships(distances: np.ndarray, m: float) -> np.ndarray:
    """
    FCM membership update from a (n, k) distance matrix.

    Rows with a zero distance are hard-assigned to the first such centroid
    (avoids 0/0); other rows follow the ratio formula and are renormalised
    to sum to exactly 1.
    """
    n, k = distances.shape
    U = np.zeros((n, k), dtype=float)

    zero = distances == 0.0
    hard = zero.any(axis=1)
    if hard.any():
        rows = np.nonzero(hard)[0]
        U[rows, zero[rows].argmax(axis=1)] = 1.0

    soft = ~hard
    if soft.any():
        d = distances[soft]
        exponent = 2.0 / (m - 1.0)
        # ratios[i, j, l] = (d_ij / d_il)^(2/(m-1)); overflow to inf gives membership 0
        with np.errstate(over="ignore"):
            ratios = (d[:, :, None] / d[:, None, :]) ** exponent
            rows = 1.0 / ratios.sum(axis=2)
        U[soft] = rows / rows.sum(axis=1, keepdims=True)

    return U


def update_centroids(X: np.ndarray, U: np.ndarray, centroids: np.ndarray, m: float) -> np.ndarray:
    """Membership-weighted means; a centroid with zero total weight stays where it is."""
    W = U ** m
    weight_sum = W.sum(axis=0)
    new = centroids.copy()
    ok = weight_sum > 0
    if ok.any():
        new[ok] = (W[:, ok].T @ X) / weight_sum[ok, None]
    return new


def objective_function(X: np.ndarray, centroids: np.ndarray, U: np.ndarray, m: float) -> float:
    """J = Σi Σj μij^m · ||xi - cj||²  (monitored, not a stopping criterion)."""
    d = euclidean_distances(X, centroids)
    return float(np.sum((U ** m) * d * d))


def initialize_centroids(X: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    """Forgy seeding: k distinct points drawn uniformly without replacement."""
    idx = rng.choice(X.shape[0], size=k, replace=False)
    return X[idx].copy()


def run_fcm(
    points: Sequence[DataPoint],
    config: FCMConfig = DEFAULT_FCM_CONFIG,
    rng: Optional[np.random.Generator | int] = None,
) -> FCMResult:
    """
    Cluster data points with Fuzzy C-Means.

    Args:
        points: Data points (features must share one dimensionality)
        config: Cluster count, fuzziness m, iteration cap, tolerance, history flag
        rng: numpy Generator or int seed for centroid seeding (fresh entropy if None)

    Returns:
        FCMResult with final centroids, membership matrix, per-pass history
        (empty unless config.track_history), last convergence error and
        argmax assignments (first index wins ties)

    Raises:
        InvalidInputError: empty data, cluster_count > number of points,
            mismatched dimensionality, non-finite or overflowing features,
            invalid config
    """
    config.validate()
    X = feature_matrix(points)
    n = X.shape[0]
    k = config.cluster_count
    m = config.fuzziness
    if k > n:
        raise InvalidInputError(f"Cannot create {k} clusters from only {n} points")

    rng = np.random.default_rng(rng)

    centroids = initialize_centroids(X, k, rng)
    prev = np.full((n, k), 1.0 / k)
    U = prev.copy()

    history: List[IterationState] = []
    converged = False
    max_change = 0.0
    iteration = 0

    logger.info(f"[FCM] Start: n={n}, d={X.shape[1]}, k={k}, m={m}, max_iterations={config.max_iterations}, tol={config.tolerance}")

    while iteration < config.max_iterations and not converged:
        U = update_memberships(euclidean_distances(X, centroids), m)
        centroids = update_centroids(X, U, centroids, m)

        max_change = float(np.max(np.abs(U - prev)))
        converged = max_change < config.tolerance

        if config.track_history:
            history.append(IterationState(
                iteration=iteration,
                centroids=_frozen(centroids),
                membership_matrix=_frozen(U),
                convergence_error=max_change,
                objective_function=objective_function(X, centroids, U, m),
            ))

        logger.debug(f"[FCM] Iteration {iteration}: max_change={max_change:.6f}")
        prev = U
        iteration += 1

    assignments = np.argmax(U, axis=1)
    assignments.flags.writeable = False

    if converged:
        logger.info(f"[FCM] Converged after {iteration} iterations (error={max_change:.2e})")
    else:
        logger.warning(f"[FCM] Stopped at max_iterations={config.max_iterations} without convergence (error={max_change:.2e})")

    return FCMResult(
        centroids=_frozen(centroids),
        membership_matrix=_frozen(U),
        iteration_history=tuple(history),
        convergence_error=max_change,
        iteration_count=iteration,
        cluster_assignments=assignments,
        converged=converged,
    )


__all__ = [
    "run_fcm", "feature_matrix", "euclidean_distances", "update_memberships",
    "update_centroids", "objective_function", "initialize_centroids",
]
