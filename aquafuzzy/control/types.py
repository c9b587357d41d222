"""
Types and enumerations for the coagulation/flocculation fuzzy controller.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple


class PhCorrection(str, Enum):
    """
    pH correction level recommended by the dominant rule.

    Maps to the dosing of lime (alkaline correction) or acid:
    - NONE → water already in the coagulation window
    - SLIGHT / MODERATE / INTENSE → 5 / 12 / 25 mg/L per pH unit of deviation
    """

    NONE = "none"
    SLIGHT = "slight"
    MODERATE = "moderate"
    INTENSE = "intense"


class RiskLevel(str, Enum):
    OPTIMAL = "optimal"
    CAUTION = "caution"
    CRITICAL = "critical"


@dataclass(frozen=True)
class TrapezoidalSet:
    """
    Linguistic term with a trapezoidal membership function.

    points = (a, b, c, d):
        - value <= a or value >= d   → 0
        - b <= value <= c            → 1 (plateau)
        - a < value < b              → rising ramp
        - c < value < d              → falling ramp

    A vertical edge (a == b or c == d) belongs to the plateau, so shoulder
    sets at the ends of a universe keep membership 1 at their boundary.
    """
    name: str
    points: Tuple[float, float, float, float]

    def __post_init__(self):
        if len(self.points) != 4:
            raise ValueError(f"Set '{self.name}' needs 4 breakpoints, got {len(self.points)}")
        a, b, c, d = self.points
        if not (a <= b <= c <= d):
            raise ValueError(f"Set '{self.name}' breakpoints must satisfy a<=b<=c<=d: {self.points}")
        object.__setattr__(self, "points", tuple(float(p) for p in self.points))


@dataclass(frozen=True)
class RuleOutputs:
    dose: str
    time: str
    ph_correction: PhCorrection = PhCorrection.NONE

    def as_dict(self) -> Dict[str, str]:
        return {"dose": self.dose, "time": self.time, "phCorrection": self.ph_correction.value}


@dataclass(frozen=True)
class FuzzyRule:
    id: int
    name: str
    conditions: Mapping[str, str] = field(hash=False)  # variable -> set name
    outputs: RuleOutputs
    base_cost: float  # $/m³

    def __post_init__(self):
        object.__setattr__(self, "conditions", MappingProxyType(dict(self.conditions)))


@dataclass(frozen=True)
class WaterInputs:
    """Raw water readings: turbidity (NTU), pH, temperature (°C)."""
    turbidity: float
    ph: float
    temperature: float

    @classmethod
    def coerce(cls, inputs: Any) -> "WaterInputs":
        """Accept a WaterInputs or any mapping with the three readings."""
        if isinstance(inputs, cls):
            return inputs
        return cls(
            turbidity=float(inputs["turbidity"]),
            ph=float(inputs["ph"]),
            temperature=float(inputs["temperature"]),
        )

    def as_dict(self) -> Dict[str, float]:
        return {"turbidity": self.turbidity, "ph": self.ph, "temperature": self.temperature}


@dataclass(frozen=True)
class RuleActivation:
    id: int
    name: str
    firing_strength: float
    conditions: Dict[str, str]
    outputs: Dict[str, str]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "firingStrength": self.firing_strength,
            "conditions": dict(self.conditions),
            "outputs": dict(self.outputs),
        }


@dataclass(frozen=True)
class FuzzyOutputs:
    coagulant_dose: float  # mg/L
    flocculation_time: int  # minutes
    ph_correction: PhCorrection
    ph_correction_amount: float  # mg/L of lime or acid
    operational_cost: float  # $/m³
    quality_score: int  # 0-100
    risk_level: RiskLevel
    efficiency: int  # 20-100
    explanation: str
    rule_activations: Tuple[RuleActivation, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """External (camelCase) rendering consumed by the dashboard layer."""
        return {
            "coagulantDose": self.coagulant_dose,
            "flocculationTime": self.flocculation_time,
            "phCorrection": self.ph_correction.value,
            "phCorrectionAmount": self.ph_correction_amount,
            "operationalCost": self.operational_cost,
            "qualityScore": self.quality_score,
            "riskLevel": self.risk_level.value,
            "efficiency": self.efficiency,
            "explanation": self.explanation,
            "ruleActivations": [a.as_dict() for a in self.rule_activations],
        }
