"""Sanitation and range policy applied to raw form input before it reaches the engine."""

from __future__ import annotations

import math
import re
from typing import Literal, Union

from fire_dashboard.constants import MONTHS_PER_YEAR

DurationUnit = Literal["months", "years"]

_NOT_AMOUNT_CHAR = re.compile(r"[^0-9.\-]")
_NOT_DECIMAL_CHAR = re.compile(r"[^0-9.]")
_NOT_DIGIT = re.compile(r"[^0-9]")


def clamp(n: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, n))


def js_round(x: float) -> int:
    """Round half up, the way browser form code rounds (0.5 -> 1, -0.5 -> 0)."""
    return math.floor(x + 0.5)


def parse_number(text: str) -> float:
    """Parse ``text`` as a float, returning NaN instead of raising."""
    try:
        return float(text)
    except ValueError:
        return float("nan")


def sanitize_amount(raw: Union[str, int, float, None]) -> float:
    """
    Turn a typed currency amount into a number.

    "1,500,000" -> 1500000.0, "" -> 0.0, "12a3" -> 123.0; anything that still
    does not parse to a finite number becomes 0.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw) if math.isfinite(raw) else 0.0

    text = str(raw).replace(",", "").replace(" ", "")
    if text == "":
        return 0.0

    n = parse_number(_NOT_AMOUNT_CHAR.sub("", text))
    return n if math.isfinite(n) else 0.0


def sanitize_whole_amount(raw: Union[str, int, float, None]) -> float:
    """
    Turn a typed amount into a whole number by keeping its digits only.

    "1,500,000" -> 1500000.0, "1.5" -> 15.0, "-250" -> 250.0. Numbers are
    passed through when finite.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw) if math.isfinite(raw) else 0.0

    digits = _NOT_DIGIT.sub("", str(raw))
    return float(digits) if digits else 0.0


def sanitize_decimal_text(raw: str) -> str:
    """
    Normalize a partially typed decimal while keeping it editable.

    Commas count as decimal points, anything but digits and "." is dropped and
    only the first "." survives ("8,5" -> "8.5", "1.2.3" -> "1.23"). Trailing
    "." is kept so "8." can still be typed.
    """
    text = _NOT_DECIMAL_CHAR.sub("", raw.replace(",", "."))
    head, sep, tail = text.partition(".")
    if not sep:
        return head
    return f"{head}.{tail.replace('.', '')}"


def duration_to_months(value: float, unit: DurationUnit) -> int:
    """Whole months for a (value, unit) duration, floored at zero."""
    if not math.isfinite(value):
        return 0
    v = max(0.0, value)
    return js_round(v * MONTHS_PER_YEAR) if unit == "years" else js_round(v)


def format_plain_number(n: float) -> str:
    """Shortest text for ``n`` as typed back into an input ("8", "8.5")."""
    if not math.isfinite(n):
        return ""
    if float(n).is_integer():
        return str(int(n))
    return repr(float(n))
