"""Rounding helpers.

Python's built-in ``round`` uses banker's rounding (half to even). Reported
values round half away from zero, so 0.125 -> 0.13 and -80.5 -> -81.
"""

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_away(value: float, ndigits: int = 0) -> float:
    """Round ``value`` to ``ndigits`` decimals, ties away from zero.

    The float is converted through its shortest repr so that values such as
    2.675 (stored as 2.67499999...) round the way they are written.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def round_int(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(round_half_away(value, 0))


def format_amount(value: float) -> str:
    """Thousands-separated amount; decimals only when the value has them."""
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.2f}"
