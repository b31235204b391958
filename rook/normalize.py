"""Numeric input normalization to the scoring granularity."""

from __future__ import annotations

import math
from numbers import Real

from .teams import TOTAL_HAND_POINTS

POINT_STEP = 5


def coerce_number(value) -> float:
    """Best-effort numeric conversion; anything unparseable becomes 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Real):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError:
            return 0
    if math.isnan(number):
        return 0
    if number.is_integer():
        return int(number)
    return number


def coerce_position(value) -> int:
    number = coerce_number(value)
    if math.isinf(number):
        return 0
    return int(number)


def round_to_step(value: float, step: int = POINT_STEP) -> int:
    """Round to the nearest multiple of ``step``, halves away from zero."""
    scaled = abs(value) / step
    rounded = math.floor(scaled + 0.5) * step
    return int(math.copysign(rounded, value)) if rounded else 0


def normalize(value, minimum: int = 0, maximum: int = TOTAL_HAND_POINTS) -> int:
    """Coerce ``value``, round it to a multiple of 5 and clamp it into [minimum, maximum]."""
    number = coerce_number(value)
    if math.isinf(number):
        return maximum if number > 0 else minimum
    return min(maximum, max(minimum, round_to_step(number)))
