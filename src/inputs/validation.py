# src/inputs/validation.py
"""
Free-text number helpers for CLI and form-style inputs.

Parsing mirrors a lenient leading-number read: "1,200" -> 1200.0, "$350k" -> 350.0,
"12.5%" -> 12.5, "abc" -> invalid. Thousands separators and a leading currency
sign are ignored.
"""

from __future__ import annotations

import re
import sys

_LEADING_NUM_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


def _clean(value: str | float | int | None) -> str:
    if value is None:
        return ""
    return str(value).strip().lstrip("$").replace(",", "").strip()


def _parse(value: str | float | int | None) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value == value else None  # NaN
    m = _LEADING_NUM_RE.match(_clean(value))
    return float(m.group(0)) if m else None


def safe_float(value: str | float | int | None, default: float = 0.0) -> float:
    num = _parse(value)
    return default if num is None else num


def safe_int(value: str | float | int | None, default: int = 0) -> int:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return int(value) if value == value else default
    m = _LEADING_INT_RE.match(_clean(value))
    return int(m.group(0)) if m else default


def is_valid_number(
    value: str | float | int | None,
    min_value: float = -sys.float_info.max,
    max_value: float = sys.float_info.max,
) -> bool:
    """True when value parses as a number within [min_value, max_value]."""
    num = _parse(value)
    if num is None:
        return False
    return min_value <= num <= max_value


def is_valid_percentage(value: str | float | int | None) -> bool:
    return is_valid_number(value, 0, 100)


def is_valid_interest_rate(value: str | float | int | None) -> bool:
    return is_valid_number(value, 0, 100)


def is_valid_positive_number(value: str | float | int | None) -> bool:
    return is_valid_number(value, 0)


def is_valid_integer(value: str | float | int | None) -> bool:
    num = _parse(value)
    return num is not None and num.is_integer()


def is_valid_positive_integer(value: str | float | int | None) -> bool:
    return is_valid_integer(value) and safe_float(value) >= 0


__all__ = [
    "safe_float",
    "safe_int",
    "is_valid_number",
    "is_valid_percentage",
    "is_valid_interest_rate",
    "is_valid_positive_number",
    "is_valid_integer",
    "is_valid_positive_integer",
]
