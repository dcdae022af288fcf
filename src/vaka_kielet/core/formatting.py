"""
Finnish (fi-FI) number formatting for display.

Output does not depend on the process locale:
  - thousands are grouped with a no-break space (U+00A0)
  - the decimal separator is a comma
  - negative numbers use the minus sign (U+2212)
  - anything non-finite renders as an en dash placeholder
"""

from __future__ import annotations

import math
import numbers
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

from vaka_kielet.core.data_loader import coerce_number

PLACEHOLDER = "\u2013"

_GROUP_SEP = "\u00a0"
_DECIMAL_SEP = ","
_MINUS = "\u2212"

# Wide enough for any finite float plus the fraction digits
_ROUNDING_CONTEXT = Context(prec=400)


def _localize(formatted: str) -> str:
    # Python's "," grouping + "." decimal -> fi-FI
    return (
        formatted.replace(",", _GROUP_SEP)
        .replace(".", _DECIMAL_SEP)
        .replace("-", _MINUS)
    )


def _round(value: float, places: str) -> Decimal:
    # Exact binary value, ties away from zero (0.25 -> 0.3, 2.25 -> 2.3)
    return Decimal(value).quantize(Decimal(places), rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT)


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def format_integer(value: Any) -> str:
    """
    Grouped count, e.g. 12345 -> '12 345'. Fractions (if any) are kept up to
    three digits. Strings are read as numbers; unreadable input gives '–'.
    """
    if isinstance(value, numbers.Real):
        n = float(value)
    else:
        n = coerce_number(value)

    if not math.isfinite(n):
        return PLACEHOLDER

    text = f"{_round(n, '0.001'):,.3f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return _localize(text)


def format_percent(value: Any) -> str:
    """
    One-decimal percentage, e.g. 15.0 -> '15,0 %'. Non-numbers give '–'.
    """
    if not _is_real(value) or not math.isfinite(float(value)):
        return PLACEHOLDER
    text = f"{_round(float(value), '0.1'):,.1f}"
    return f"{_localize(text)} %"
