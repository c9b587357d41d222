"""
Numeric helpers shared by the controller and the diagnostics engine.

Scores are rounded half-up (0.5 -> 1) so that displayed integers match what
plant operators expect from their SCADA panels, not Python's banker's rounding.
"""
import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round `value` to `digits` decimals, ties away from minus infinity."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))
