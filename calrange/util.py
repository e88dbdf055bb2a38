"""Utility methods used by multiple modules."""

from __future__ import annotations

import datetime
from decimal import Decimal
from fractions import Fraction
from typing import Any

__all__ = [
    "now_factory",
    "to_decimal",
]


def now_factory() -> datetime.datetime:
    """Factory method for the current time to facilitate mocking."""
    return datetime.datetime.now(tz=datetime.UTC)


def to_decimal(value: Any) -> Decimal:
    """Coerce a real number into an exact Decimal.

    Floats are converted through their shortest repr so that 0.1 becomes
    Decimal("0.1") rather than the full binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Expected a number of seconds, got {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise ValueError(f"Expected a finite number of seconds, got {value!r}")
        return Decimal(repr(value))
    if isinstance(value, Fraction):
        return Decimal(value.numerator) / Decimal(value.denominator)
    if isinstance(value, str):
        return Decimal(value)
    raise TypeError(f"Expected a number of seconds, got {value!r}")
