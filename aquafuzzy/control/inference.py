"""
Fuzzy controller entry points for the coagulation/flocculation stage.

Pipeline (Mamdani):
    1. Fuzzification     → membership degree of each reading in each set
    2. Rule evaluation   → firing strength per rule (AND = min)
    3. Aggregation       → output-set activation (OR = max)
    4. Defuzzification   → crisp dose (mg/L) and flocculation time (min)
    5. Derived metrics   → pH correction, cost, quality, risk, efficiency

API Usage:
    >>> out = run_fuzzy_inference({"turbidity": 120, "ph": 7.2, "temperature": 18})
    >>> out.coagulant_dose        # e.g., 40.0
    >>> out.risk_level            # RiskLevel.OPTIMAL
    >>> out.rule_activations[0]   # strongest rule

Inputs are not range-checked: readings outside every catalogue simply give
all-zero memberships and the default fallbacks (dose 0, cost 0.10).
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import logging

from aquafuzzy.control import defuzzify as dfz
from aquafuzzy.control.config import ControlPolicy
from aquafuzzy.control.membership import INPUT_VARIABLES, fuzzify
from aquafuzzy.control.rules import DEFAULT_RULE_BASE, RuleBase, infer
from aquafuzzy.control.types import FuzzyOutputs, WaterInputs
from aquafuzzy.utils.numeric import round_half_up

logger = logging.getLogger(__name__)


def get_membership_degrees(inputs: Any, rule_base: RuleBase = DEFAULT_RULE_BASE) -> Dict[str, Dict[str, float]]:
    """
    Membership degrees of each reading, for display and debugging.

    Returns:
        {"turbidity": {set: degree}, "ph": {...}, "temperature": {...}}
    """
    readings = WaterInputs.coerce(inputs).as_dict()
    return {var: fuzzify(readings[var], rule_base.catalogue(var)) for var in INPUT_VARIABLES}


def run_fuzzy_inference(
    inputs: Any,
    rule_base: RuleBase = DEFAULT_RULE_BASE,
    policy: Optional[ControlPolicy] = None,
) -> FuzzyOutputs:
    """
    Run the full controller on one set of raw water readings.

    Args:
        inputs: WaterInputs or mapping with 'turbidity' (NTU), 'ph', 'temperature' (°C)
        rule_base: Rule table and catalogues (defaults to the plant rule base)
        policy: Policy constants for the derived metrics (defaults if None)

    Returns:
        FuzzyOutputs, built fresh on every call (no state is kept between calls)
    """
    P = policy or ControlPolicy()
    water = WaterInputs.coerce(inputs)

    memberships = get_membership_degrees(water, rule_base)
    trace = infer(memberships, rule_base)

    dose = dfz.defuzzify(trace.dose_activations, rule_base.catalogue("dose"))
    time = dfz.defuzzify(trace.time_activations, rule_base.catalogue("time"))

    activations = tuple(trace.rule_activations)
    outputs = FuzzyOutputs(
        coagulant_dose=round_half_up(dose, 1),
        flocculation_time=int(round_half_up(time)),
        ph_correction=trace.ph_correction,
        ph_correction_amount=round_half_up(dfz.ph_correction_amount(trace.ph_correction, water.ph, P), 1),
        operational_cost=round_half_up(dfz.operational_cost(trace, P), 3),
        quality_score=dfz.quality_score(water.turbidity, water.ph, dose),
        risk_level=dfz.risk_level(water.turbidity, water.ph, P),
        efficiency=dfz.efficiency(water.turbidity, water.ph, water.temperature, P),
        explanation=dfz.explanation(water, dose, time, activations),
        rule_activations=activations,
    )

    logger.debug(f"[FUZZY] Inputs: turbidity={water.turbidity:.1f}, ph={water.ph:.2f}, temperature={water.temperature:.1f}")
    logger.debug(f"[FUZZY] Fired rules: {[a.id for a in activations]}")
    logger.debug(f"[FUZZY] Decision: dose={outputs.coagulant_dose} mg/L, time={outputs.flocculation_time} min, "
                 f"ph_correction={outputs.ph_correction.value}, risk={outputs.risk_level.value}")
    if not activations:
        logger.warning(f"[FUZZY] No rule fired for {water.as_dict()}, using fallback outputs")

    return outputs


__all__ = ["run_fuzzy_inference", "get_membership_degrees"]
