"""Lenient input parsing shared by the cart, stock and party-size paths."""

from __future__ import annotations

import re

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: object, default: int = 0) -> int:
    """Parse the leading integer of ``value``.

    ``"3"`` -> 3, ``" 12 pax"`` -> 12, ``4.9`` -> 4. Anything without a leading
    integer (``None``, ``""``, ``"abc"``, NaN, booleans) yields ``default``.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return default
        return int(value)
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    if match is None:
        return default
    return int(match.group(1))
