"""
Defuzzification and derived plant metrics.

Crisp outputs use the centroid over plateau centres (Center of Area on the
set representatives):

    output = Σ center(set) · activation(set) / Σ activation(set)

Derived metrics (quality, risk, efficiency, cost, pH correction amount) are
computed from the raw readings and the defuzzified dose, independently of the
output-set activations.
"""

from __future__ import annotations
from typing import Mapping, Sequence

from aquafuzzy.control.config import ControlPolicy
from aquafuzzy.control.membership import Catalogue, set_center
from aquafuzzy.control.rules import InferenceTrace
from aquafuzzy.control.types import PhCorrection, RiskLevel, RuleActivation, WaterInputs
from aquafuzzy.utils.numeric import clamp, round_half_up


def defuzzify(activations: Mapping[str, float], catalogue: Catalogue) -> float:
    """Centroid of the activated sets; 0.0 when nothing is activated."""
    numerator = 0.0
    denominator = 0.0
    for fuzzy_set in catalogue:
        activation = activations.get(fuzzy_set.name, 0.0)
        if activation > 0:
            numerator += set_center(fuzzy_set) * activation
            denominator += activation
    return numerator / denominator if denominator > 0 else 0.0


def operational_cost(trace: InferenceTrace, policy: ControlPolicy) -> float:
    """Firing-strength weighted mean of the fired rules' base cost ($/m³)."""
    if trace.weight_sum > 0:
        return trace.cost_sum / trace.weight_sum
    return policy.default_cost


def ph_correction_amount(level: PhCorrection, ph: float, policy: ControlPolicy) -> float:
    """Lime/acid dose (mg/L) proportional to the deviation from neutral pH."""
    if level == PhCorrection.NONE:
        return 0.0
    return policy.correction_multipliers[level.value] * abs(ph - 7.0)


def quality_score(turbidity: float, ph: float, dose: float) -> int:
    """
    Expected quality of treated water (0-100).

    50% turbidity, 30% pH deviation, 20% dose adequacy (dose per NTU).
    """
    turbidity_factor = max(0.0, 100 - turbidity / 10)
    ph_factor = max(0.0, 100 - abs(ph - 7) * 15)
    process_factor = min(100.0, (dose / turbidity) * 500) if turbidity > 0 else 50.0
    score = round_half_up(0.5 * turbidity_factor + 0.3 * ph_factor + 0.2 * process_factor)
    return int(clamp(score, 0, 100))


def risk_level(turbidity: float, ph: float, policy: ControlPolicy) -> RiskLevel:
    if turbidity > policy.critical_turbidity or ph < policy.critical_ph_low or ph > policy.critical_ph_high:
        return RiskLevel.CRITICAL
    if turbidity > policy.caution_turbidity or ph < policy.caution_ph_low or ph > policy.caution_ph_high:
        return RiskLevel.CAUTION
    return RiskLevel.OPTIMAL


def efficiency(turbidity: float, ph: float, temperature: float, policy: ControlPolicy) -> int:
    value = 100 - turbidity / 20
    if policy.efficient_ph_low <= ph <= policy.efficient_ph_high:
        value += 20
    if temperature < policy.cold_temperature:
        value -= 10
    return int(round_half_up(clamp(value, 20, 100)))


def explanation(inputs: WaterInputs, dose: float, time: float, activations: Sequence[RuleActivation]) -> str:
    """
    Operator-facing sentence describing the water state and the decision.

    `activations` must already be sorted by descending firing strength; the
    first entry is quoted as the main rule.
    """
    parts = []

    if inputs.turbidity < 20:
        parts.append("El agua presenta baja turbidez")
    elif inputs.turbidity < 150:
        parts.append("La turbidez del agua está en niveles moderados")
    elif inputs.turbidity < 400:
        parts.append("Se detecta alta turbidez en el agua")
    else:
        parts.append("ALERTA: Turbidez extremadamente alta detectada")

    if inputs.ph < 6:
        parts.append(" y el pH es ácido, requiriendo neutralización")
    elif inputs.ph > 8.5:
        parts.append(" y el pH es alcalino, afectando la eficiencia del coagulante")
    else:
        parts.append(" con pH en rango óptimo para coagulación")

    minutes = int(round_half_up(time))
    parts.append(f". Se recomienda dosificar {dose:.1f} mg/L de coagulante con {minutes} minutos de floculación.")

    if activations:
        top = activations[0]
        parts.append(f' Regla principal: "{top.name}" (activación: {top.firing_strength * 100:.0f}%).')

    return "".join(parts)


__all__ = [
    "defuzzify", "operational_cost", "ph_correction_amount",
    "quality_score", "risk_level", "efficiency", "explanation",
]
