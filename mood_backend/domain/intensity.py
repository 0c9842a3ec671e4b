from __future__ import annotations

import math
from typing import Any

MIN_INTENSITY = 1
MAX_INTENSITY = 5
DEFAULT_INTENSITY = 3


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            number = float(stripped)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def coerce_intensity(value: Any, default: int | None = DEFAULT_INTENSITY) -> int | None:
    """
    Coerce a self-reported intensity into the 1..5 scale.

    Numbers and numeric strings are rounded half-up and clamped; anything that is
    not a finite number (missing, blank, "abc", NaN, booleans) yields `default`.
    """

    number = _as_number(value)
    if number is None:
        return default
    rounded = math.floor(number + 0.5)
    return max(MIN_INTENSITY, min(MAX_INTENSITY, rounded))
