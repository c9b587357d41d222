import pytest
from aquafuzzy import run_fuzzy_inference, get_membership_degrees
from aquafuzzy.control.config import ControlPolicy
from aquafuzzy.control.types import PhCorrection, RiskLevel, WaterInputs


def make_inputs(turbidity, ph=7.0, temperature=22.0):
    return {"turbidity": turbidity, "ph": ph, "temperature": temperature}


def test_extreme_turbidity_is_critical_and_doses_more():
    high = run_fuzzy_inference(make_inputs(800))
    low = run_fuzzy_inference(make_inputs(50))
    assert high.risk_level == RiskLevel.CRITICAL
    assert high.risk_level == "critical"
    assert high.rule_activations
    assert all(a.conditions["turbidity"] in ("muy_alta", "alta") for a in high.rule_activations)
    assert high.coagulant_dose > low.coagulant_dose
    assert high.coagulant_dose == 95.0
    assert high.flocculation_time == 58

def test_low_turbidity_neutral_ph_is_optimal():
    out = run_fuzzy_inference(make_inputs(50))
    assert out.risk_level == "optimal"
    assert out.ph_correction == PhCorrection.NONE
    assert out.ph_correction == "none"
    assert out.ph_correction_amount == 0.0
    assert out.coagulant_dose == 18.5
    assert out.flocculation_time == 16
    assert out.operational_cost == 0.1
    assert out.quality_score == 98
    assert out.efficiency == 100

def test_explanation_is_exact():
    out = run_fuzzy_inference(make_inputs(50))
    assert out.explanation == (
        "La turbidez del agua está en niveles moderados con pH en rango óptimo para coagulación. "
        "Se recomienda dosificar 18.5 mg/L de coagulante con 16 minutos de floculación. "
        'Regla principal: "Agua baja turbidez - Condiciones normales" (activación: 50%).'
    )

def test_inference_is_idempotent():
    first = run_fuzzy_inference(make_inputs(237, ph=6.4, temperature=12))
    second = run_fuzzy_inference(make_inputs(237, ph=6.4, temperature=12))
    assert first == second
    assert first.to_dict() == second.to_dict()

def test_dose_is_monotonic_in_turbidity():
    doses = [run_fuzzy_inference(make_inputs(t)).coagulant_dose for t in range(0, 1001, 5)]
    assert all(b >= a for a, b in zip(doses, doses[1:]))

def test_slight_ph_correction_for_clean_acidic_water():
    out = run_fuzzy_inference(make_inputs(10, ph=5.8, temperature=20))
    assert out.ph_correction == PhCorrection.SLIGHT
    assert out.ph_correction_amount == pytest.approx(6.0)
    assert out.risk_level == RiskLevel.CAUTION

def test_intense_ph_correction_in_emergency():
    out = run_fuzzy_inference(make_inputs(800, ph=4.0))
    assert out.ph_correction == PhCorrection.INTENSE
    assert out.ph_correction_amount == pytest.approx(75.0)
    assert out.operational_cost == pytest.approx(0.75)
    assert out.risk_level == RiskLevel.CRITICAL
    assert out.explanation.startswith("ALERTA: Turbidez extremadamente alta detectada y el pH es ácido")

def test_out_of_catalogue_inputs_fall_back():
    out = run_fuzzy_inference(make_inputs(-5))
    assert out.rule_activations == ()
    assert out.coagulant_dose == 0.0
    assert out.flocculation_time == 0
    assert out.operational_cost == pytest.approx(0.10)
    assert out.ph_correction == PhCorrection.NONE
    assert "Regla principal" not in out.explanation

def test_nan_reading_fires_nothing():
    degrees = get_membership_degrees(make_inputs(float("nan")))
    assert set(degrees["turbidity"].values()) == {0.0}
    out = run_fuzzy_inference(make_inputs(float("nan")))
    assert out.rule_activations == ()
    assert out.coagulant_dose == 0.0
    assert out.flocculation_time == 0
    assert out.ph_correction == PhCorrection.NONE
    assert out.operational_cost == pytest.approx(0.10)
    assert 0 <= out.quality_score <= 100
    assert 20 <= out.efficiency <= 100

def test_scores_stay_in_range():
    for turbidity in (0, 30, 180, 450, 1000):
        for ph in (3.0, 6.0, 7.0, 9.0, 12.0):
            for temperature in (5, 20, 35):
                out = run_fuzzy_inference(make_inputs(turbidity, ph, temperature))
                assert 0 <= out.quality_score <= 100
                assert 20 <= out.efficiency <= 100
                assert out.coagulant_dose >= 0 and out.flocculation_time >= 0
                strengths = [a.firing_strength for a in out.rule_activations]
                assert strengths == sorted(strengths, reverse=True)

def test_accepts_dataclass_or_mapping():
    assert run_fuzzy_inference(WaterInputs(120, 7.2, 18)) == run_fuzzy_inference(make_inputs(120, 7.2, 18))

def test_custom_policy_thresholds():
    policy = ControlPolicy(critical_turbidity=100.0, default_cost=0.2)
    assert run_fuzzy_inference(make_inputs(120), policy=policy).risk_level == RiskLevel.CRITICAL
    assert run_fuzzy_inference(make_inputs(-5), policy=policy).operational_cost == pytest.approx(0.2)

def test_to_dict_uses_external_names():
    d = run_fuzzy_inference(make_inputs(175)).to_dict()
    assert set(d) == {
        "coagulantDose", "flocculationTime", "phCorrection", "phCorrectionAmount", "operationalCost",
        "qualityScore", "riskLevel", "efficiency", "explanation", "ruleActivations",
    }
    assert d["riskLevel"] == "caution"
    assert d["ruleActivations"][0]["firingStrength"] == pytest.approx(0.5)

def test_get_membership_degrees():
    degrees = get_membership_degrees(make_inputs(65, ph=7.0, temperature=22))
    assert set(degrees) == {"turbidity", "ph", "temperature"}
    assert degrees["turbidity"]["media"] == pytest.approx(0.5)
    assert degrees["turbidity"]["baja"] == 0.0
    assert degrees["ph"]["neutro"] == 1.0
    assert degrees["temperature"]["normal"] == 1.0
