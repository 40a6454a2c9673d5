# app/utils/numbers.py
"""
Numeric helpers for loosely typed input (spreadsheet cells, form values).
"""

import math
import re
from typing import Any, Optional

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_DECIMAL = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_number(value: Any) -> float:
    """
    Parse a price-like cell.

    Every character other than a digit or '.' is stripped first, so
    "1 250,00 грн" reads as 125000 and "-5" as 5. The leading decimal
    literal of what is left is used ("1.2.3" -> 1.2). Anything that does
    not yield a number falls back to 0.
    """
    if value is None or value == "" or value is False:
        return 0.0
    cleaned = _NON_NUMERIC.sub("", str(value))
    match = _LEADING_DECIMAL.match(cleaned)
    if not match:
        return 0.0
    return float(match.group())


def parse_float(value: Any) -> Optional[float]:
    """Strict parse for operator input. Returns None for anything that is not a finite number."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def round_half_up(value: float) -> float:
    """Round to a whole currency unit, halves go up (2.5 -> 3, -2.5 -> -2)."""
    return float(math.floor(value + 0.5))


def column_label(index: int) -> str:
    """Spreadsheet column name for a 0-based index: 0 -> A, 25 -> Z, 26 -> AA."""
    label = ""
    n = index
    while n >= 0:
        label = chr(n % 26 + 65) + label
        n = n // 26 - 1
    return label
