import pytest
from aquafuzzy.control import defuzzify as dfz
from aquafuzzy.control.config import ControlPolicy
from aquafuzzy.control.membership import DOSE_SETS, TIME_SETS
from aquafuzzy.control.rules import InferenceTrace
from aquafuzzy.control.types import PhCorrection, RiskLevel

P = ControlPolicy()


def make_trace(cost_sum=0.0, weight_sum=0.0):
    return InferenceTrace({}, {}, PhCorrection.NONE, [], cost_sum, weight_sum)


def test_defuzzify_centroid_of_plateau_centres():
    assert dfz.defuzzify({"media": 1.0}, DOSE_SETS) == 40.0
    assert dfz.defuzzify({"baja": 0.5, "media": 0.5}, DOSE_SETS) == pytest.approx(29.25)
    assert dfz.defuzzify({"muy_corto": 0.2, "muy_largo": 0.6}, TIME_SETS) == pytest.approx((4 * 0.2 + 57.5 * 0.6) / 0.8)

def test_defuzzify_without_activation_is_zero():
    assert dfz.defuzzify({}, DOSE_SETS) == 0.0
    assert dfz.defuzzify({"media": 0.0}, DOSE_SETS) == 0.0

def test_operational_cost_weighted_or_default():
    assert dfz.operational_cost(make_trace(0.3, 1.5), P) == pytest.approx(0.2)
    assert dfz.operational_cost(make_trace(), P) == 0.10

def test_ph_correction_amount_multipliers():
    assert dfz.ph_correction_amount(PhCorrection.NONE, 4.0, P) == 0.0
    assert dfz.ph_correction_amount(PhCorrection.SLIGHT, 8.0, P) == pytest.approx(5.0)
    assert dfz.ph_correction_amount(PhCorrection.MODERATE, 6.0, P) == pytest.approx(12.0)
    assert dfz.ph_correction_amount(PhCorrection.INTENSE, 9.0, P) == pytest.approx(50.0)

def test_quality_score_process_midpoint_without_turbidity():
    assert dfz.quality_score(0.0, 7.0, 2.5) == 90
    assert dfz.quality_score(2000.0, 0.0, 0.0) == 0

def test_risk_level_boundaries():
    assert dfz.risk_level(400, 7.0, P) == RiskLevel.CAUTION
    assert dfz.risk_level(400.1, 7.0, P) == RiskLevel.CRITICAL
    assert dfz.risk_level(150, 7.0, P) == RiskLevel.OPTIMAL
    assert dfz.risk_level(100, 5.5, P) == RiskLevel.CAUTION
    assert dfz.risk_level(100, 5.4, P) == RiskLevel.CRITICAL
    assert dfz.risk_level(100, 9.6, P) == RiskLevel.CRITICAL
    assert dfz.risk_level(100, 8.6, P) == RiskLevel.CAUTION

def test_efficiency_bonus_penalty_and_clamp():
    assert dfz.efficiency(100, 9.0, 10, P) == 85
    assert dfz.efficiency(100, 7.0, 20, P) == 100
    assert dfz.efficiency(3000, 7.0, 5, P) == 20
