import numpy as np
import pytest
from aquafuzzy.control.membership import (
    DEFAULT_CATALOGUES, TURBIDITY_SETS, PH_SETS, TEMPERATURE_SETS,
    membership, fuzzify, set_center, membership_curve, catalogue_curves,
)
from aquafuzzy.control.types import TrapezoidalSet

ALL_SETS = [s for catalogue in DEFAULT_CATALOGUES.values() for s in catalogue]
MEDIA = TrapezoidalSet("media", (50, 80, 150, 200))


def test_membership_plateau_and_ramps():
    assert membership(100, MEDIA) == 1.0
    assert membership(80, MEDIA) == 1.0
    assert membership(150, MEDIA) == 1.0
    assert membership(65, MEDIA) == pytest.approx(0.5)
    assert membership(175, MEDIA) == pytest.approx(0.5)

def test_membership_zero_outside_support():
    assert membership(50, MEDIA) == 0.0
    assert membership(200, MEDIA) == 0.0
    assert membership(-10, MEDIA) == 0.0
    assert membership(250, MEDIA) == 0.0

def test_membership_vertical_edges_do_not_divide_by_zero():
    muy_baja = TURBIDITY_SETS[0]   # (0, 0, 5, 15)
    muy_alta = TURBIDITY_SETS[-1]  # (400, 600, 1000, 1000)
    assert membership(0, muy_baja) == 1.0
    assert membership(10, muy_baja) == pytest.approx(0.5)
    assert membership(1000, muy_alta) == 1.0
    assert membership(1000.5, muy_alta) == 0.0

def test_membership_degenerate_point_set():
    spike = TrapezoidalSet("spike", (3, 3, 3, 3))
    assert membership(3, spike) == 1.0
    assert membership(2.9, spike) == 0.0
    assert membership(3.1, spike) == 0.0

@pytest.mark.parametrize("fuzzy_set", ALL_SETS, ids=lambda s: s.name)
def test_membership_bounds_and_landmarks(fuzzy_set):
    a, b, c, d = fuzzy_set.points
    for v in np.linspace(a - 10, d + 10, 97):
        assert 0.0 <= membership(v, fuzzy_set) <= 1.0
    assert membership(set_center(fuzzy_set), fuzzy_set) == 1.0
    if a < b:
        assert membership(a, fuzzy_set) == 0.0

def test_trapezoid_rejects_unordered_points():
    with pytest.raises(ValueError):
        TrapezoidalSet("bad", (10, 5, 20, 30))
    with pytest.raises(ValueError):
        TrapezoidalSet("short", (1, 2, 3))

def test_fuzzify_covers_every_set_in_order():
    degrees = fuzzify(7.0, PH_SETS)
    assert list(degrees) == ["muy_acido", "acido", "neutro", "alcalino", "muy_alcalino"]
    assert degrees["neutro"] == 1.0
    assert sum(degrees.values()) == 1.0

def test_fuzzify_temperature_overlap():
    degrees = fuzzify(16.5, TEMPERATURE_SETS)
    assert degrees["fria"] == pytest.approx(0.1875)
    assert degrees["normal"] == pytest.approx(0.3)
    assert degrees["calida"] == 0.0

def test_membership_curve_matches_scalar_evaluation():
    universe = np.linspace(0, 1000, 201)
    for fuzzy_set in TURBIDITY_SETS:
        curve = membership_curve(fuzzy_set, universe)
        expected = [membership(v, fuzzy_set) for v in universe]
        assert np.allclose(curve, expected)

def test_catalogue_curves_keys():
    curves = catalogue_curves(PH_SETS, np.linspace(0, 14, 15))
    assert set(curves) == {s.name for s in PH_SETS}
    assert all(len(c) == 15 for c in curves.values())

@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_reading_belongs_to_no_set(value):
    assert fuzzify(value, TURBIDITY_SETS) == {s.name: 0.0 for s in TURBIDITY_SETS}
    assert membership(value, PH_SETS[0]) == 0.0

def test_membership_curve_zeroes_nan_samples():
    curve = membership_curve(MEDIA, np.array([100.0, np.nan, 60.0]))
    assert curve.tolist() == [1.0, 0.0, pytest.approx(1 / 3)]
