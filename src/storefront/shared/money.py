"""Rounding and formatting helpers for monetary amounts and weights.

Amounts are kept as floats throughout; rounding only happens when a fee is
fixed or a figure is rendered, and always rounds halves away from zero.
"""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 0) -> float:
    """Round ``value`` to ``places`` decimals, halves away from zero."""
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def format_amount(value: float, places: int = 0) -> str:
    """Render ``value`` with a fixed number of decimals, rounding halves up."""
    exponent = Decimal(1).scaleb(-places)
    return str(Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP))
