from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a report card does (2.5 -> 3), not banker's rounding."""
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def percentage(part: float, whole: float, *, digits: int = 0) -> float:
    """part/whole as a percentage clamped to [0, 100]; 0 when whole is not positive."""
    if not whole or whole <= 0:
        return 0.0
    return clamp(round_half_up(part / whole * 100, digits), 0.0, 100.0)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def to_number(value: Any) -> Optional[float]:
    """Coerce numeric-looking input to float; None for missing or garbage."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(Decimal(str(value)))
    except (InvalidOperation, ValueError):
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number
