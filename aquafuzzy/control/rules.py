"""
Mamdani rule base and rule engine for coagulation/flocculation control.

Each rule encodes operator expertise:

    IF turbidity IS <set> AND (pH IS <set> | temperature IS <set>)
    THEN dose IS <set>, time IS <set>, pH correction IS <level>

Mamdani operators used:
    - AND:  Minimum over the rule's conditions (firing strength)
    - OR:   Maximum across rules producing the same output set
    - THEN: Clipping (the output set is activated up to the firing strength)

The rule table is an immutable RuleBase value; the engine below is a pure
function of (memberships, rule base), so tests can swap the table freely.

Rule base (natural language):
────────────────────────────────────────────────────────────────────────
CLEAN WATER            R1-R4    very low / low turbidity
MEDIUM TURBIDITY       R5-R8    typical conditions
HIGH TURBIDITY         R9-R12   typical after rainfall
EMERGENCY              R13-R15  storm events, extreme turbidity
EXTREME pH             R16-R18  industrial discharges
TEMPERATURE            R19-R20  warm water speeds up the reaction
────────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from aquafuzzy.control.membership import Catalogue, DEFAULT_CATALOGUES
from aquafuzzy.control.types import FuzzyRule, PhCorrection, RuleActivation, RuleOutputs

N, S, M, I = PhCorrection.NONE, PhCorrection.SLIGHT, PhCorrection.MODERATE, PhCorrection.INTENSE


def _rule(id, name, conditions, dose, time, ph_correction, base_cost):
    return FuzzyRule(id, name, conditions, RuleOutputs(dose, time, ph_correction), base_cost)


DEFAULT_RULES: Tuple[FuzzyRule, ...] = (
    # Clean water
    _rule(1, "Agua cristalina - Condiciones óptimas", {"turbidity": "muy_baja", "ph": "neutro"}, "muy_baja", "muy_corto", N, 0.05),
    _rule(2, "Agua limpia - pH ácido leve", {"turbidity": "muy_baja", "ph": "acido"}, "baja", "corto", S, 0.08),
    _rule(3, "Agua limpia - pH alcalino leve", {"turbidity": "muy_baja", "ph": "alcalino"}, "baja", "corto", S, 0.08),
    _rule(4, "Agua baja turbidez - Condiciones normales", {"turbidity": "baja", "ph": "neutro"}, "baja", "corto", N, 0.10),
    # Medium turbidity
    _rule(5, "Turbidez media - pH neutro óptimo", {"turbidity": "media", "ph": "neutro"}, "media", "medio", N, 0.18),
    _rule(6, "Turbidez media - pH ácido", {"turbidity": "media", "ph": "acido"}, "media", "medio", M, 0.22),
    _rule(7, "Turbidez media - pH alcalino", {"turbidity": "media", "ph": "alcalino"}, "alta", "medio", S, 0.24),
    _rule(8, "Turbidez media - Agua fría", {"turbidity": "media", "temperature": "fria"}, "alta", "largo", N, 0.25),
    # High turbidity
    _rule(9, "Alta turbidez - pH neutro", {"turbidity": "alta", "ph": "neutro"}, "alta", "largo", N, 0.35),
    _rule(10, "Alta turbidez - pH ácido", {"turbidity": "alta", "ph": "acido"}, "alta", "largo", M, 0.42),
    _rule(11, "Alta turbidez - pH alcalino", {"turbidity": "alta", "ph": "alcalino"}, "muy_alta", "largo", M, 0.45),
    _rule(12, "Alta turbidez - Agua fría", {"turbidity": "alta", "temperature": "fria"}, "muy_alta", "muy_largo", N, 0.48),
    # Emergency
    _rule(13, "Emergencia - Turbidez extrema, pH neutro", {"turbidity": "muy_alta", "ph": "neutro"}, "muy_alta", "muy_largo", N, 0.55),
    _rule(14, "Emergencia - Turbidez extrema, pH ácido severo", {"turbidity": "muy_alta", "ph": "muy_acido"}, "muy_alta", "muy_largo", I, 0.75),
    _rule(15, "Emergencia - Turbidez extrema, pH alcalino severo", {"turbidity": "muy_alta", "ph": "muy_alcalino"}, "muy_alta", "muy_largo", I, 0.72),
    # Extreme pH
    _rule(16, "Vertido ácido - Turbidez baja", {"turbidity": "baja", "ph": "muy_acido"}, "media", "medio", I, 0.38),
    _rule(17, "Vertido alcalino - Turbidez baja", {"turbidity": "baja", "ph": "muy_alcalino"}, "media", "medio", I, 0.35),
    _rule(18, "Vertido ácido - Turbidez media", {"turbidity": "media", "ph": "muy_acido"}, "alta", "largo", I, 0.52),
    # Temperature
    _rule(19, "Agua caliente - Turbidez baja", {"turbidity": "baja", "temperature": "calida"}, "baja", "muy_corto", N, 0.08),
    _rule(20, "Agua caliente - Turbidez alta", {"turbidity": "alta", "temperature": "calida"}, "media", "medio", N, 0.28),
)


@dataclass(frozen=True)
class RuleBase:
    """
    Immutable bundle of rules and the catalogues they refer to.

    Attributes:
        rules: Ordered rule table (order decides ties for the dominant rule)
        catalogues: variable name -> catalogue, inputs and outputs ('dose', 'time')
    """
    rules: Tuple[FuzzyRule, ...]
    catalogues: Mapping[str, Catalogue] = field(default_factory=lambda: dict(DEFAULT_CATALOGUES), hash=False)

    def __post_init__(self):
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "catalogues", MappingProxyType({var: tuple(sets) for var, sets in self.catalogues.items()}))
        ids = [r.id for r in self.rules]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Rule ids must be unique: {ids}")

    def catalogue(self, variable: str) -> Catalogue:
        return self.catalogues[variable]


DEFAULT_RULE_BASE = RuleBase(DEFAULT_RULES)


@dataclass
class InferenceTrace:
    """Aggregated result of evaluating the rule base once."""
    dose_activations: Dict[str, float]
    time_activations: Dict[str, float]
    ph_correction: PhCorrection
    rule_activations: List[RuleActivation]
    cost_sum: float
    weight_sum: float


def evaluate_rule(rule: FuzzyRule, memberships: Mapping[str, Mapping[str, float]]) -> float:
    """
    Firing strength of a rule: min of its condition memberships.

    A condition on a variable absent from `memberships` is left out of the AND;
    an unknown set name counts as 0. No usable condition → 0.
    """
    degrees = []
    for variable, set_name in rule.conditions.items():
        if variable not in memberships:
            continue
        degrees.append(memberships[variable].get(set_name, 0.0))
    return min(degrees) if degrees else 0.0


def infer(memberships: Mapping[str, Mapping[str, float]], rule_base: RuleBase = DEFAULT_RULE_BASE) -> InferenceTrace:
    """
    Evaluate every rule against fuzzified inputs and aggregate the outputs.

    Args:
        memberships: variable -> {set name -> degree}, as produced by fuzzify()
        rule_base: Rule table to evaluate

    Returns:
        InferenceTrace with per-set output activations (max-aggregated), the
        pH correction of the strongest rule (first one wins ties), the fired
        rules sorted by descending firing strength, and the strength-weighted
        cost accumulators.
    """
    dose_activations: Dict[str, float] = {}
    time_activations: Dict[str, float] = {}
    fired: List[RuleActivation] = []
    cost_sum = 0.0
    weight_sum = 0.0
    ph_correction = PhCorrection.NONE
    dominant_strength = 0.0

    for rule in rule_base.rules:
        strength = evaluate_rule(rule, memberships)
        if strength <= 0:
            continue

        out = rule.outputs
        dose_activations[out.dose] = max(dose_activations.get(out.dose, 0.0), strength)
        time_activations[out.time] = max(time_activations.get(out.time, 0.0), strength)

        cost_sum += rule.base_cost * strength
        weight_sum += strength

        if strength > dominant_strength:
            dominant_strength = strength
            ph_correction = out.ph_correction

        fired.append(RuleActivation(
            id=rule.id,
            name=rule.name,
            firing_strength=strength,
            conditions=dict(rule.conditions),
            outputs=out.as_dict(),
        ))

    # sorted() is stable: equal strengths keep rule-table order
    fired = sorted(fired, key=lambda a: a.firing_strength, reverse=True)

    return InferenceTrace(
        dose_activations=dose_activations,
        time_activations=time_activations,
        ph_correction=ph_correction,
        rule_activations=fired,
        cost_sum=cost_sum,
        weight_sum=weight_sum,
    )


__all__ = [
    "DEFAULT_RULES", "DEFAULT_RULE_BASE", "RuleBase",
    "InferenceTrace", "evaluate_rule", "infer",
]
