"""Display strings for engine outputs."""

from __future__ import annotations

import math
from typing import Callable

from fire_dashboard.constants import MONTHS_PER_YEAR
from fire_dashboard.schemas.metric import MetricValue

PLACEHOLDER = "-"
UNREACHABLE_TEXT = "Unreachable (check savings / expected return)"


def format_krw(n: float) -> str:
    """Thousands-grouped amount with at most three fraction digits."""
    if not math.isfinite(n):
        return PLACEHOLDER
    text = f"{n:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_won(n: float) -> str:
    if not math.isfinite(n):
        return PLACEHOLDER
    return f"{format_krw(round(n))} KRW"


def format_percent(n: float, digits: int = 1) -> str:
    if not math.isfinite(n):
        return PLACEHOLDER
    return f"{n:.{digits}f} %"


def format_time_to_target(months: float) -> str:
    if months == math.inf:
        return UNREACHABLE_TEXT
    if not math.isfinite(months):
        return PLACEHOLDER
    years, rest = divmod(int(months), MONTHS_PER_YEAR)
    return f"{years} years {rest} months"


def metric(value: float, formatter: Callable[[float], str] = format_won) -> MetricValue:
    if value == math.inf:
        return MetricValue(value=None, status="unreachable", display=formatter(value))
    if not math.isfinite(value):
        return MetricValue(value=None, status="undefined", display=formatter(value))
    return MetricValue(value=float(value), status="ok", display=formatter(value))
