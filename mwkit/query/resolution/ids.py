"""Canonical representation of numeric page and revision IDs.

IDs may arrive as ints, floats, or strings (formatversion=1 map keys are
always strings) and can exceed the precision of a double. They are
compared as canonical decimal strings, never as floats.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any


def canonical_id(value: Any) -> str:
    """Return the canonical decimal string for a numeric ID.

    Args:
        value: int, str, float or Decimal holding an integral number

    Returns:
        Decimal string without sign padding, exponent or fraction

    Raises:
        ValueError: If the value is not an integral number
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric ID: {value!r}")
    try:
        number = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Not a numeric ID: {value!r}") from exc
    if not number.is_finite() or number != number.to_integral_value():
        raise ValueError(f"Not an integral ID: {value!r}")
    return format(number.to_integral_value(), "f")


def same_id(a: Any, b: Any) -> bool:
    """Whether two IDs denote the same entity."""
    return canonical_id(a) == canonical_id(b)
