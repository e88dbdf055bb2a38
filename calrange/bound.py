"""Tagged representation of an interval bound.

A bound is either a finite value of the element type or one of the two
infinite sentinels, `INF` and `NEG_INF`. Comparisons and arithmetic check the
tag before looking at the value, so the element type never needs to know how
to compare itself against an infinity.
"""

from __future__ import annotations

import enum
import math
import operator
from collections.abc import Callable
from decimal import Decimal
from typing import Any, Generic, TypeVar

__all__ = ["Bound", "BoundKind", "INF", "NEG_INF", "compare_values"]

T = TypeVar("T")


class BoundKind(str, enum.Enum):
    """The tag of a bound."""

    FINITE = "FINITE"
    POSITIVE_INFINITE = "POSITIVE_INFINITE"
    NEGATIVE_INFINITE = "NEGATIVE_INFINITE"


def compare_values(left: Any, right: Any) -> int:
    """Three way comparison returning -1, 0 or 1."""
    return (left > right) - (left < right)


def _infinite_kind(value: Any) -> BoundKind | None:
    """Return the infinite tag for float and Decimal infinities."""
    if isinstance(value, float) and math.isinf(value):
        return BoundKind.POSITIVE_INFINITE if value > 0 else BoundKind.NEGATIVE_INFINITE
    if isinstance(value, Decimal) and value.is_infinite():
        return BoundKind.POSITIVE_INFINITE if value > 0 else BoundKind.NEGATIVE_INFINITE
    return None


class Bound(Generic[T]):
    """An interval bound: a finite value or an infinite sentinel."""

    __slots__ = ("_kind", "_value")

    def __init__(self, kind: BoundKind, value: T | None = None) -> None:
        """Initialize Bound."""
        if kind != BoundKind.FINITE and value is not None:
            raise ValueError("An infinite bound does not have a value")
        self._kind = kind
        self._value = value

    @classmethod
    def of(cls, value: Any) -> Bound[Any]:
        """Wrap a value as a bound, mapping float infinities to the sentinels."""
        if isinstance(value, Bound):
            return value
        if (kind := _infinite_kind(value)) is not None:
            return INF if kind == BoundKind.POSITIVE_INFINITE else NEG_INF
        return Bound(BoundKind.FINITE, value)

    @property
    def kind(self) -> BoundKind:
        """Return the tag of the bound."""
        return self._kind

    @property
    def value(self) -> T:
        """Return the finite value, or raise for an infinite bound."""
        if self._kind != BoundKind.FINITE:
            raise ValueError(f"Infinite bound {self} does not have a value")
        return self._value  # type: ignore[return-value]

    @property
    def is_infinite(self) -> bool:
        """Return True for either infinite sentinel."""
        return self._kind != BoundKind.FINITE

    def unwrap(self) -> Any:
        """Return the finite value, or the sentinel itself when infinite."""
        if self._kind == BoundKind.FINITE:
            return self._value
        return self

    def compare(self, other: Bound[Any]) -> int:
        """Three way comparison with another bound."""
        if self._kind == other.kind and self._kind != BoundKind.FINITE:
            return 0
        if self._kind == BoundKind.NEGATIVE_INFINITE:
            return -1
        if self._kind == BoundKind.POSITIVE_INFINITE:
            return 1
        if other.kind == BoundKind.NEGATIVE_INFINITE:
            return 1
        if other.kind == BoundKind.POSITIVE_INFINITE:
            return -1
        return compare_values(self._value, other.value)

    def negate(self) -> Bound[Any]:
        """Return the infinite sentinel on the other side."""
        if self._kind == BoundKind.POSITIVE_INFINITE:
            return NEG_INF
        if self._kind == BoundKind.NEGATIVE_INFINITE:
            return INF
        return Bound.of(-self._value)  # type: ignore[operator]

    def apply(self, op: Callable[[Any, Any], Any], operand: Any) -> Bound[Any]:
        """Return the bound shifted or scaled by an operand.

        Shifting leaves an infinite bound unchanged, and scaling by a negative
        number moves it to the other side.
        """
        if self._kind == BoundKind.FINITE:
            return Bound.of(op(self._value, operand))
        if op in (operator.add, operator.sub):
            return self
        if operand == 0:
            if op is operator.truediv:
                raise ZeroDivisionError(f"Unable to divide bound {self} by zero")
            raise ValueError(f"Unable to scale infinite bound {self} by zero")
        return self if operand > 0 else self.negate()

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, (float, Decimal)) and (kind := _infinite_kind(other)):
            return self._kind == kind
        if not isinstance(other, Bound):
            return NotImplemented
        if self._kind != other.kind:
            return False
        return self._kind != BoundKind.FINITE or bool(self._value == other.value)

    def __hash__(self) -> int:
        if self._kind == BoundKind.POSITIVE_INFINITE:
            return hash(math.inf)
        if self._kind == BoundKind.NEGATIVE_INFINITE:
            return hash(-math.inf)
        return hash(self._value)

    def __str__(self) -> str:
        if self._kind == BoundKind.POSITIVE_INFINITE:
            return "Inf"
        if self._kind == BoundKind.NEGATIVE_INFINITE:
            return "-Inf"
        return str(self._value)

    def __repr__(self) -> str:
        if self._kind == BoundKind.FINITE:
            return f"Bound({self._value!r})"
        return str(self)


INF: Bound[Any] = Bound(BoundKind.POSITIVE_INFINITE)
"""Sentinel for a positive infinite bound."""

NEG_INF: Bound[Any] = Bound(BoundKind.NEGATIVE_INFINITE)
"""Sentinel for a negative infinite bound."""
