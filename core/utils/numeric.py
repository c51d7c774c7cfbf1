"""
Numeric helpers

Form inputs arrive as strings, numbers or nothing at all.
Everything is parsed into Decimal with "blank or invalid => 0" semantics,
accumulated at full precision and only quantized for display.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from core.constants import Precision

NumericInput = Union[str, int, float, Decimal, None]

ZERO = Decimal("0")
HUNDRED = Decimal("100")
THOUSAND = Decimal("1000")


def to_decimal(value: NumericInput) -> Decimal:
    """Parse a raw input value into Decimal

    Never raises. Blank, non-numeric, NaN and infinite values become 0.

    Args:
        value: raw field value (str, int, float, Decimal or None)

    Returns:
        Parsed Decimal (0 when the input is unusable)
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return ZERO
        # str() keeps the short repr (0.1 -> "0.1"), not the binary expansion
        return Decimal(str(value))

    text = str(value).strip()
    if not text:
        return ZERO

    try:
        parsed = Decimal(text)
    except (InvalidOperation, ValueError):
        return ZERO

    return parsed if parsed.is_finite() else ZERO


def to_int(value: NumericInput) -> int:
    """Parse a piece count, truncating any fraction toward zero"""
    return int(to_decimal(value))


def percent_of(value: Decimal, pct: Decimal) -> Decimal:
    """value * pct / 100"""
    return value * pct / HUNDRED


def _quantize(value: Decimal, quantum: Decimal) -> Decimal:
    try:
        result = value.quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # more digits than the context precision; leave unrounded
        return value
    # "-0.000" is never useful on a bill
    if result.is_zero():
        return result.copy_abs()
    return result


def quantize_weight(value: NumericInput) -> Decimal:
    """Round a weight to milligram precision (3 places)"""
    return _quantize(to_decimal(value), Precision.WEIGHT_QUANTUM)


def quantize_amount(value: NumericInput) -> Decimal:
    """Round a currency amount to 2 places"""
    return _quantize(to_decimal(value), Precision.AMOUNT_QUANTUM)


def quantize_rupee(value: NumericInput) -> Decimal:
    """Round a currency amount to a whole rupee (half up)"""
    return _quantize(to_decimal(value), Precision.RUPEE_QUANTUM)


def format_weight(value: NumericInput) -> str:
    """Weight display string, e.g. 16.650"""
    return str(quantize_weight(value))


def format_amount(value: NumericInput) -> str:
    """Currency display string, e.g. 20.00"""
    return str(quantize_amount(value))


def format_touch(value: NumericInput) -> str:
    """Purity display string, e.g. 92.50"""
    return str(_quantize(to_decimal(value), Precision.TOUCH_QUANTUM))
