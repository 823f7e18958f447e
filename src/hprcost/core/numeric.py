"""Tolerant numeric parsing for harvester text fields."""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable

_WHITESPACE = re.compile(r"\s+")
# Plain decimal notation with an optional exponent; ASCII digits only, no digit separators.
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_number(value: str | float | int | None) -> float:
    """Convert text such as ``" 0,45 "`` into a float.

    Whitespace is trimmed and removed and the first comma is read as a decimal separator.
    Anything that is not plain decimal notation (``"1_5"``, non-ASCII digits, ``"inf"``)
    yields ``0.0``.
    """

    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0
    normalised = _WHITESPACE.sub("", value.strip()).replace(",", ".", 1)
    if _DECIMAL.fullmatch(normalised) is None:
        return 0.0
    parsed = float(normalised)
    return parsed if math.isfinite(parsed) else 0.0


def first_positive(candidates: Iterable[Callable[[], float]]) -> float | None:
    """Evaluate candidate resolvers in order and return the first value > 0.

    Each candidate is a zero-argument callable so later (possibly costlier) lookups only run
    when the earlier ones come back empty. ``None`` means no candidate produced a value.
    """

    for candidate in candidates:
        value = candidate()
        if value > 0:
            return value
    return None


__all__ = ["parse_number", "first_positive"]
