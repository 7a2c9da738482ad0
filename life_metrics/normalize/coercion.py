"""
Best-effort numeric coercion. Total: never raises, never returns NaN or inf.
"""

import math
import re
from decimal import Decimal
from numbers import Real
from typing import Any

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
# Longest leading float after stripping ("12.5.3" -> 12.5, "12-3" -> 12)
_LEADING_NUMBER = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)")


def parse_numeric(value: Any) -> float:
    """
    Parse a number from a numeric or currency/unit-formatted value.

    "$1,234.50" -> 1234.5, "175 lbs" -> 175, "abc" -> 0, NaN -> 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, (Real, Decimal)):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return 0
        return number if math.isfinite(number) else 0
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", value))
        if not match:
            return 0
        try:
            number = float(match.group(0))
        except (OverflowError, ValueError):
            return 0
        return number if math.isfinite(number) else 0
    return 0
