from __future__ import annotations

import math
from typing import Optional, Tuple

from fire_dashboard.core.inputs import (
    clamp,
    format_plain_number,
    parse_number,
    sanitize_decimal_text,
)


class PercentEditBuffer:
    """
    Keeps what the user is typing apart from the last committed number.

      - focus():  start editing
      - edit():   update raw_text; commit live when it reads as a full number
      - blur():   stop editing; commit the text or roll it back
      - sync():   external change, only shown when not editing

    ``bounds`` (lo, hi) clamps every committed value.
    """

    def __init__(self, value: float, bounds: Optional[Tuple[float, float]] = None) -> None:
        self.bounds = bounds
        self.committed_value = self._bounded(value) if math.isfinite(value) else value
        self.raw_text = format_plain_number(self.committed_value)
        self.editing = False

    def _bounded(self, n: float) -> float:
        if self.bounds is None:
            return n
        lo, hi = self.bounds
        return clamp(n, lo, hi)

    def _commit(self, n: float) -> float:
        self.committed_value = self._bounded(n)
        return self.committed_value

    def focus(self) -> None:
        self.editing = True

    def edit(self, text: str) -> Optional[float]:
        """Store the sanitized text; returns the committed value if it changed."""
        self.raw_text = sanitize_decimal_text(text)
        if self.raw_text in ("", "."):
            return None

        n = parse_number(self.raw_text)
        if not math.isfinite(n):
            return None
        return self._commit(n)

    def blur(self) -> float:
        self.editing = False

        text = self.raw_text.replace(",", ".")
        n = 0.0 if text.strip() == "" else parse_number(text)
        if math.isfinite(n):
            self._commit(n)
        self.raw_text = format_plain_number(self.committed_value)
        return self.committed_value

    def sync(self, value: float) -> None:
        if self.editing:
            return
        self.committed_value = value
        self.raw_text = format_plain_number(value)


def commit_percent_text(
    text: str, fallback: float, bounds: Optional[Tuple[float, float]] = None
) -> float:
    """Value a percent field holding ``fallback`` commits after ``text`` is typed and the field is left."""
    buffer = PercentEditBuffer(fallback, bounds)
    buffer.focus()
    buffer.edit(text)
    return buffer.blur()
