"""
Load controller policy constants.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping
from aquafuzzy.utils.json_io import read_json, safe_get


def _default_multipliers() -> Dict[str, float]:
    return {"slight": 5.0, "moderate": 12.0, "intense": 25.0}


@dataclass(frozen=True)
class ControlPolicy:
    """
    Policy thresholds used by the derived metrics.

    These are operating-policy constants, not values derived from the rule base.
    """
    default_cost: float = 0.10  # $/m³ when no rule fires
    correction_multipliers: Mapping[str, float] = field(default_factory=_default_multipliers, hash=False)  # mg/L per pH unit
    critical_turbidity: float = 400.0
    critical_ph_low: float = 5.5
    critical_ph_high: float = 9.5
    caution_turbidity: float = 150.0
    caution_ph_low: float = 6.2
    caution_ph_high: float = 8.5
    efficient_ph_low: float = 6.5
    efficient_ph_high: float = 8.0
    cold_temperature: float = 15.0

    def __post_init__(self):
        object.__setattr__(self, "correction_multipliers", MappingProxyType(dict(self.correction_multipliers)))


def load_policy(path: str | None = "data/control/policy.json") -> ControlPolicy:
    """Load policy from JSON file, or return defaults."""
    data = read_json(path)
    if data is None:
        return ControlPolicy()
    defaults = ControlPolicy()
    multipliers = dict(defaults.correction_multipliers)
    multipliers.update(safe_get(data, "correction_multipliers", {}))
    return ControlPolicy(
        default_cost=safe_get(data, "default_cost", defaults.default_cost),
        correction_multipliers=multipliers,
        critical_turbidity=safe_get(data, "critical_turbidity", defaults.critical_turbidity),
        critical_ph_low=safe_get(data, "critical_ph_low", defaults.critical_ph_low),
        critical_ph_high=safe_get(data, "critical_ph_high", defaults.critical_ph_high),
        caution_turbidity=safe_get(data, "caution_turbidity", defaults.caution_turbidity),
        caution_ph_low=safe_get(data, "caution_ph_low", defaults.caution_ph_low),
        caution_ph_high=safe_get(data, "caution_ph_high", defaults.caution_ph_high),
        efficient_ph_low=safe_get(data, "efficient_ph_low", defaults.efficient_ph_low),
        efficient_ph_high=safe_get(data, "efficient_ph_high", defaults.efficient_ph_high),
        cold_temperature=safe_get(data, "cold_temperature", defaults.cold_temperature),
    )
