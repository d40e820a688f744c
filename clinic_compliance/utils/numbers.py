"""Numeric coercion for untrusted CSV cell values."""

from __future__ import annotations

import math
import re
from typing import Any

_SEPARATORS = re.compile(r"[,\s]")
_CURRENCY_PREFIX = re.compile(r"^(?:rs\.?|inr|usd|[$€£₹¥])", re.IGNORECASE)


def parse_amount(value: Any) -> float | None:
    """Parse a monetary amount such as ``"₹1,200.50"`` or ``" 300 "``.

    Returns None for empty, non-numeric or non-finite input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    text = _CURRENCY_PREFIX.sub("", _SEPARATORS.sub("", str(value)))
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_int(value: Any) -> int | None:
    """Parse an integer the way a lenient CSV reader would.

    ``"40"`` and ``"40.9"`` both give 40. Strings with stray characters
    (``"40 years"``) are rejected rather than guessed at.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None

    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def is_blank(value: Any) -> bool:
    """True for values a CSV reader uses to mean "no data"."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False
