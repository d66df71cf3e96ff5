"""Numeric guards for untrusted score inputs.

Every score, ceiling and impact estimate that crosses into the engine passes
through ``sanitize_score_value`` so that NaN, infinities, strings and other
junk degrade to a value inside the caller's range instead of raising.
"""

import math
from typing import Any


def _to_float(value: Any) -> float:
    """Coerce to float the way a JSON consumer would; non-numeric gives NaN."""
    if isinstance(value, float):
        return value
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def sanitize_score_value(value: Any, min_value: float, max_value: float) -> float:
    """Clamp ``value`` into ``[min_value, max_value]``.

    Non-finite or non-numeric input returns ``min_value``. In-range values are
    returned unchanged (no rounding).
    """
    numeric = _to_float(value)
    if not math.isfinite(numeric):
        return min_value
    return max(min_value, min(max_value, numeric))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positives (1.25 -> 1.3, 2.5 -> 3).

    Python's ``round`` uses banker's rounding; score displays expect the
    schoolbook rule.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def truncate(value: float, digits: int = 2) -> float:
    """Scale, floor and unscale: 1.239 -> 1.23. Never rounds up."""
    factor = 10 ** digits
    return math.floor(value * factor) / factor
