"""
Membership model for the coagulation/flocculation controller.

Linguistic variables and their trapezoidal catalogues (Spanish labels, as used
by the plant operators who authored the rule base):

Inputs:
    - turbidity (NTU): muy_baja, baja, media, alta, muy_alta
        WHO/EPA bands: <5 drinkable, 5-50 surface water, 50-500 after rain, >500 storm events
    - ph: muy_acido, acido, neutro, alcalino, muy_alcalino
        6.5-8 is the optimal window for aluminium sulphate
    - temperature (°C): fria, normal, calida
        cold water slows coagulation kinetics

Outputs:
    - dose (mg/L Al2(SO4)3): muy_baja, baja, media, alta, muy_alta
    - time (minutes of slow mixing): muy_corto, corto, medio, largo, muy_largo

Membership degrees are evaluated with scikit-fuzzy's `trapmf`, which handles
vertical edges (a == b or c == d) without dividing by a zero-width ramp.

Dependencies:
    - numpy
    - scikit-fuzzy
"""

from __future__ import annotations
from typing import Dict, Iterable, Tuple
import numpy as np

try:
    import skfuzzy as fuzz
except ImportError:
    raise ImportError(
        "scikit-fuzzy is not installed. Install with:\n"
        "    pip install scikit-fuzzy\n"
        "Documentation: https://pythonhosted.org/scikit-fuzzy/"
    )

from aquafuzzy.control.types import TrapezoidalSet

Catalogue = Tuple[TrapezoidalSet, ...]

# === INPUT CATALOGUES ===

TURBIDITY_SETS: Catalogue = (
    TrapezoidalSet("muy_baja", (0, 0, 5, 15)),
    TrapezoidalSet("baja", (10, 20, 40, 60)),
    TrapezoidalSet("media", (50, 80, 150, 200)),
    TrapezoidalSet("alta", (150, 250, 400, 500)),
    TrapezoidalSet("muy_alta", (400, 600, 1000, 1000)),
)

PH_SETS: Catalogue = (
    TrapezoidalSet("muy_acido", (0, 0, 4, 5.5)),
    TrapezoidalSet("acido", (5, 5.5, 6, 6.5)),
    TrapezoidalSet("neutro", (6.2, 6.8, 7.5, 8.2)),
    TrapezoidalSet("alcalino", (7.8, 8.5, 9, 9.5)),
    TrapezoidalSet("muy_alcalino", (9, 10, 14, 14)),
)

TEMPERATURE_SETS: Catalogue = (
    TrapezoidalSet("fria", (0, 0, 10, 18)),
    TrapezoidalSet("normal", (15, 20, 25, 28)),
    TrapezoidalSet("calida", (25, 30, 40, 40)),
)

# === OUTPUT CATALOGUES ===

DOSE_SETS: Catalogue = (
    TrapezoidalSet("muy_baja", (0, 0, 5, 12)),
    TrapezoidalSet("baja", (8, 15, 22, 28)),
    TrapezoidalSet("media", (25, 35, 45, 55)),
    TrapezoidalSet("alta", (50, 60, 75, 85)),
    TrapezoidalSet("muy_alta", (80, 90, 100, 100)),
)

TIME_SETS: Catalogue = (
    TrapezoidalSet("muy_corto", (0, 0, 8, 12)),
    TrapezoidalSet("corto", (10, 14, 18, 22)),
    TrapezoidalSet("medio", (20, 25, 32, 38)),
    TrapezoidalSet("largo", (35, 42, 50, 55)),
    TrapezoidalSet("muy_largo", (50, 55, 60, 60)),
)

DEFAULT_CATALOGUES: Dict[str, Catalogue] = {
    "turbidity": TURBIDITY_SETS,
    "ph": PH_SETS,
    "temperature": TEMPERATURE_SETS,
    "dose": DOSE_SETS,
    "time": TIME_SETS,
}

INPUT_VARIABLES = ("turbidity", "ph", "temperature")


def _trapezoid(x: np.ndarray, fuzzy_set: TrapezoidalSet) -> np.ndarray:
    # trapmf starts from ones and no mask matches NaN
    y = fuzz.trapmf(x, fuzzy_set.points)
    return np.where(np.isfinite(x), y, 0.0)


def membership(value: float, fuzzy_set: TrapezoidalSet) -> float:
    """
    Degree of membership of `value` in a trapezoidal set, in [0, 1].

    Non-finite readings (NaN, inf) belong to no set.

    Example:
        >>> membership(100, TURBIDITY_SETS[2])  # 'media' plateau is 80-150
        1.0
    """
    x = np.asarray([value], dtype=float)
    return float(_trapezoid(x, fuzzy_set)[0])


def fuzzify(value: float, catalogue: Iterable[TrapezoidalSet]) -> Dict[str, float]:
    """Membership degree of `value` in every set of the catalogue (catalogue order)."""
    return {s.name: membership(value, s) for s in catalogue}


def set_center(fuzzy_set: TrapezoidalSet) -> float:
    """Centre of the plateau, used as the set's representative value."""
    _, b, c, _ = fuzzy_set.points
    return (b + c) / 2


def membership_curve(fuzzy_set: TrapezoidalSet, universe: np.ndarray) -> np.ndarray:
    """Membership function sampled over a universe (for plotting the catalogues)."""
    return _trapezoid(np.asarray(universe, dtype=float), fuzzy_set)


def catalogue_curves(catalogue: Iterable[TrapezoidalSet], universe: np.ndarray) -> Dict[str, np.ndarray]:
    return {s.name: membership_curve(s, universe) for s in catalogue}


__all__ = [
    "Catalogue",
    "TURBIDITY_SETS", "PH_SETS", "TEMPERATURE_SETS", "DOSE_SETS", "TIME_SETS",
    "DEFAULT_CATALOGUES", "INPUT_VARIABLES",
    "membership", "fuzzify", "set_center", "membership_curve", "catalogue_curves",
]
