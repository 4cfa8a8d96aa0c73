"""
Score Utilities
app/scoring/utils.py

Normalization helpers shared by the layout engine and the vote path.
"""

import math
from decimal import Decimal
from numbers import Real
from typing import Any

MIDPOINT_SCORE = 0.5


def clamp(value: float, min_val: float = 0.0, max_val: float = 1.0) -> float:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def is_numeric(value: Any) -> bool:
    """True for finite-or-infinite real numbers; False for bools, NaN and non-numbers."""
    if isinstance(value, Decimal):
        return not value.is_nan()
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return not math.isnan(value)


def effective_score(value: Any) -> float:
    """
    Score used for layout.

    Missing or non-numeric scores sit at the midpoint; everything else is
    clamped to [0, 1].
    """
    if not is_numeric(value):
        return MIDPOINT_SCORE
    return clamp(float(value))


def percent_to_score(percent: float) -> float:
    """Convert a 0-100 vote percentage to the [0, 1] score scale."""
    return percent / 100.0
