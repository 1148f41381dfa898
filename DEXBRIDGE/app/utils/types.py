from __future__ import annotations

import math
from typing import Any

TRUE_WORDS = frozenset({"1", "true", "yes", "on", "enabled"})
FALSE_WORDS = frozenset({"0", "false", "no", "off", "disabled"})


# -----------------------------------------------------------------------------
def parse_number(value: Any) -> float | None:
    """Finite number from a JSON setting value; booleans are not numbers."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        candidate = float(value)
    elif isinstance(value, str):
        try:
            candidate = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(candidate) or math.isinf(candidate):
        return None
    return candidate


# -----------------------------------------------------------------------------
def coerce_positive_int(value: Any, default: int) -> int:
    number = parse_number(value)
    if number is None or number < 1:
        return default
    return int(number)


# -----------------------------------------------------------------------------
def coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
        return default
    number = parse_number(value)
    if number in (0.0, 1.0):
        return bool(number)
    return default


# -----------------------------------------------------------------------------
def coerce_float(
    value: Any, default: float, minimum: float | None = None, maximum: float | None = None
) -> float:
    number = parse_number(value)
    candidate = default if number is None else number
    if minimum is not None:
        candidate = max(candidate, minimum)
    if maximum is not None:
        candidate = min(candidate, maximum)
    return candidate


__all__ = [
    "coerce_bool",
    "coerce_float",
    "coerce_positive_int",
    "parse_number",
]
