"""
Forgiving coercion helpers for upstream leaderboard payloads.

The upstream API is treated as an opaque JSON source: fields may be missing,
null or of the wrong type. These helpers never raise; anything unusable
collapses to ``None`` (or an empty string) and the caller decides what that
means.
"""

from __future__ import annotations

import math
import re
from typing import Any, Final

__all__ = [
    "as_finite_number",
    "as_text",
    "clean_handle",
]

_HANDLE_PREFIX_RE: Final[re.Pattern[str]] = re.compile(r"^@+")


def as_finite_number(value: Any) -> float | None:
    """
    Return ``value`` as a float when it is a real JSON number.

    Booleans and numeric strings are rejected on purpose: upstream sends
    numbers as numbers, and a string "12" is a malformed row, not rank 12.

    >>> as_finite_number(3)
    3.0
    >>> as_finite_number("3") is None
    True
    >>> as_finite_number(float("inf")) is None
    True
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def as_text(value: Any) -> str:
    """Stringify a scalar field, mapping ``None`` to the empty string."""
    if value is None:
        return ""
    return str(value).strip()


def clean_handle(raw: str | None) -> str:
    """Strip whitespace and any leading ``@`` from a social handle."""
    return _HANDLE_PREFIX_RE.sub("", (raw or "").strip()).strip()
