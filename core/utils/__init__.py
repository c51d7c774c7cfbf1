"""
Utility package

Lenient numeric parsing and display rounding shared by billing and ledgers.
"""

from core.utils.numeric import (
    ZERO,
    HUNDRED,
    THOUSAND,
    NumericInput,
    to_decimal,
    to_int,
    percent_of,
    quantize_weight,
    quantize_amount,
    quantize_rupee,
    format_weight,
    format_amount,
    format_touch,
)

__all__ = [
    "ZERO",
    "HUNDRED",
    "THOUSAND",
    "NumericInput",
    "to_decimal",
    "to_int",
    "percent_of",
    "quantize_weight",
    "quantize_amount",
    "quantize_rupee",
    "format_weight",
    "format_amount",
    "format_touch",
]
