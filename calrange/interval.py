"""An interval is an ordered range of values with open or closed ends.

An `Interval` is defined by a start and end bound and whether each bound is
excluded. Either bound may be infinite. The element type only needs to be
ordered for membership, overlap and comparison:

```python
from calrange.interval import Interval

interval = Interval(1, 10, excludes_max=True)
print(interval)                  # 1..^10
print(5 in interval)             # True
print(interval.overlaps(Interval(10, 20)))  # False
print(interval * 2)              # 2..^20
```

Element types with a registered discrete capability (integers, single
characters and dates) can also be counted, indexed and enumerated. The
elements are produced lazily, so an interval with an infinite end can be
traversed as far as the caller needs:

```python
import itertools
from calrange.bound import INF

print(list(itertools.islice(Interval(1, INF), 3)))  # [1, 2, 3]
print(Interval("a", "e").element_count())            # 5
```
"""

from __future__ import annotations

import itertools
import logging
import operator
import random
from collections.abc import Callable, Iterable, Iterator, Sequence
from decimal import Decimal
from fractions import Fraction
from typing import Any, Generic, Optional, TypeVar, Union

from .bound import INF, NEG_INF, Bound, BoundKind, compare_values
from .exceptions import InvalidFormatError, IntervalError, NotIntegerIntervalError
from .iter import EmptyIterable, RepeatIterable, SteppedIterable
from .parsing.interval import parse_interval, parse_number
from .types.element_types import (
    Discrete,
    check_codepoints,
    discrete_for,
    successor_for,
)

__all__ = ["Interval"]

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

_NUMERIC = (int, float, Decimal, Fraction)


def _is_numeric(value: Any) -> bool:
    return isinstance(value, _NUMERIC) and not isinstance(value, bool)


def _start_before_end(
    start: Bound[Any], excludes_start: bool, end: Bound[Any], excludes_end: bool
) -> bool:
    """Return True if some point is at or after the start and at or before the end."""
    if start.kind == BoundKind.NEGATIVE_INFINITE or end.kind == BoundKind.POSITIVE_INFINITE:
        return True
    result = start.compare(end)
    if result == 0:
        return not excludes_start and not excludes_end
    return result < 0


class Interval(Generic[T]):
    """An immutable ordered interval with optionally excluded or infinite bounds."""

    __slots__ = ("_start", "_end", "_excludes_min", "_excludes_max")

    def __init__(
        self,
        start: T | Bound[T],
        end: T | Bound[T],
        excludes_min: bool = False,
        excludes_max: bool = False,
    ) -> None:
        """Initialize an interval, float infinities become infinite bounds."""
        self._start: Bound[T] = Bound.of(start)
        self._end: Bound[T] = Bound.of(end)
        self._excludes_min = bool(excludes_min)
        self._excludes_max = bool(excludes_max)

    @classmethod
    def upto(cls, count: int) -> Interval[int]:
        """Create the interval of the first `count` integers starting at zero."""
        return Interval(0, count, excludes_max=True)

    @classmethod
    def parse(cls, text: str) -> Interval[Any]:
        """Parse a rendering like `1^..5` or `-Inf..^0` with numeric bounds."""
        parsed = parse_interval(text)
        return Interval(
            parsed.start,
            parsed.end,
            excludes_min=parsed.excludes_min,
            excludes_max=parsed.excludes_max,
        )

    @property
    def min(self) -> Any:
        """Return the start value, or the infinite sentinel."""
        return self._start.unwrap()

    @property
    def max(self) -> Any:
        """Return the end value, or the infinite sentinel."""
        return self._end.unwrap()

    @property
    def excludes_min(self) -> bool:
        """Return True if the start value is not part of the interval."""
        return self._excludes_min

    @property
    def excludes_max(self) -> bool:
        """Return True if the end value is not part of the interval."""
        return self._excludes_max

    @property
    def infinite(self) -> bool:
        """Return True if either bound is infinite."""
        return self._start.is_infinite or self._end.is_infinite

    @property
    def is_discrete(self) -> bool:
        """Return True if the elements can be counted and indexed."""
        return self._discrete_capability() is not None

    @property
    def is_empty(self) -> bool:
        """Return True if the interval has no elements.

        A finite discrete interval is empty when it has nothing to count, so
        `1^..^2` is empty for integers even though it spans part of the line.
        """
        if not self._spans():
            return True
        if self.infinite or (capability := self._discrete_capability()) is None:
            return False
        return self._count(capability) == 0

    def _spans(self) -> bool:
        """Return True if some point of the line lies between the bounds."""
        return _start_before_end(
            self._start, self._excludes_min, self._end, self._excludes_max
        )

    def bounds(self) -> tuple[Any, Any]:
        """Return the start and end values (or sentinels)."""
        return (self.min, self.max)

    def _finite_values(self) -> list[Any]:
        return [bound.value for bound in (self._start, self._end) if not bound.is_infinite]

    def _discrete_capability(self) -> Optional[Discrete[Any]]:
        """Return the discrete capability shared by the finite bounds."""
        values = self._finite_values()
        if not values or len({type(value) for value in values}) != 1:
            return None
        capabilities = [discrete_for(value) for value in values]
        if any(capability is None for capability in capabilities):
            return None
        return capabilities[0]

    def _check_text(self) -> None:
        """Reject text bounds made of combining codepoints before enumerating."""
        for value in self._finite_values():
            if isinstance(value, str):
                check_codepoints(value)

    def _require_discrete(self) -> Discrete[Any]:
        self._check_text()
        if (capability := self._discrete_capability()) is None:
            raise NotIntegerIntervalError(
                f"Unable to count or index a non-discrete interval: {self}"
            )
        return capability

    def _coerce(self, point: Any) -> Any:
        """Convert a scalar to the representation of the bounds.

        Numbers are compared as text against a text interval, and numeric
        text is compared as a number against a numeric interval.
        """
        if not (values := self._finite_values()) or isinstance(point, (Bound, Interval)):
            return point
        sample = values[0]
        if isinstance(sample, str) and _is_numeric(point):
            return str(point)
        if _is_numeric(sample) and isinstance(point, str):
            try:
                return parse_number(point)
            except InvalidFormatError as err:
                raise TypeError(
                    f"Unable to compare '{point}' with numeric interval {self}"
                ) from err
        return point

    def _satisfies_start(self, point: Bound[Any]) -> bool:
        if self._start.kind == BoundKind.NEGATIVE_INFINITE:
            return True
        result = self._start.compare(point)
        return result < 0 if self._excludes_min else result <= 0

    def _satisfies_end(self, point: Bound[Any]) -> bool:
        if self._end.kind == BoundKind.POSITIVE_INFINITE:
            return True
        result = self._end.compare(point)
        return result > 0 if self._excludes_max else result >= 0

    def contains(self, point: Any) -> bool:
        """Return True if the point is in the interval.

        When the point is another interval, return True if all of its values
        are also in this interval.
        """
        if isinstance(point, Interval):
            return self._includes(point)
        bound = Bound.of(self._coerce(point))
        return self._satisfies_start(bound) and self._satisfies_end(bound)

    def __contains__(self, point: Any) -> bool:
        return self.contains(point)

    def _includes(self, other: Interval[Any]) -> bool:
        """Return True if the other interval is a subset of this interval."""
        if not other._spans():
            return True
        if self._start.kind != BoundKind.NEGATIVE_INFINITE:
            result = self._start.compare(other._start)
            if result > 0 or (
                result == 0 and self._excludes_min and not other.excludes_min
            ):
                return False
        if self._end.kind != BoundKind.POSITIVE_INFINITE:
            result = self._end.compare(other._end)
            if result < 0 or (
                result == 0 and self._excludes_max and not other.excludes_max
            ):
                return False
        return True

    def overlaps(self, other: Interval[Any]) -> bool:
        """Return True if the two intervals have any value in common.

        Bounds are compared as points on a line, so `1..^3` overlaps `2^..5`
        even for integer intervals.
        """
        if not self._spans() or not other._spans():
            return False
        return _start_before_end(
            self._start, self._excludes_min, other._end, other.excludes_max
        ) and _start_before_end(
            other._start, other.excludes_min, self._end, self._excludes_max
        )

    def effective_bounds(self) -> tuple[Any, Any]:
        """Return the first and last values actually in a discrete interval.

        Raises IntervalError when an excluded bound is the first or last value
        of its type, leaving nothing to step to.
        """
        if (bounds := self._effective_bounds(self._require_discrete())) is None:
            raise IntervalError(f"Excluded bound is at the end of its type: {self}")
        return bounds

    def _effective_bounds(
        self, capability: Discrete[Any]
    ) -> Optional[tuple[Any, Any]]:
        """Return the included first and last values, or None past the type range."""
        first = self._start.unwrap()
        last = self._end.unwrap()
        try:
            if not self._start.is_infinite and self._excludes_min:
                first = capability.successor(first)
            if not self._end.is_infinite and self._excludes_max:
                last = capability.predecessor(last)
        except OverflowError:
            return None
        return (first, last)

    def element_count(self) -> int:
        """Return the number of values in a finite discrete interval."""
        capability = self._require_discrete()
        if self.infinite:
            raise NotIntegerIntervalError(f"Unable to count infinite interval: {self}")
        return self._count(capability)

    def _count(self, capability: Discrete[Any]) -> int:
        if (bounds := self._effective_bounds(capability)) is None:
            return 0
        first, last = bounds
        if compare_values(first, last) > 0:
            return 0
        return capability.distance(first, last) + 1

    def at(self, position: int) -> Optional[T]:
        """Return the value at a zero based position, or None if out of range."""
        if not isinstance(position, int) or isinstance(position, bool):
            raise TypeError(
                f"Interval position must be an integer, not {type(position).__name__}"
            )
        capability = self._require_discrete()
        if self._start.is_infinite:
            raise NotIntegerIntervalError(
                f"Unable to index interval with an infinite start: {self}"
            )
        if position < 0:
            return None
        if not self._end.is_infinite and position >= self._count(capability):
            return None
        if (bounds := self._effective_bounds(capability)) is None:
            return None
        try:
            return capability.advance(bounds[0], position)  # type: ignore[no-any-return]
        except OverflowError:
            return None

    def __getitem__(self, position: Union[int, slice]) -> Any:
        if isinstance(position, slice):
            return list(
                itertools.islice(
                    self.to_sequence(), position.start, position.stop, position.step
                )
            )
        return self.at(position)

    def to_sequence(self) -> Iterable[Any]:
        """Return a lazy, restartable sequence of the values in the interval."""
        self._check_text()
        if self._start.kind == BoundKind.NEGATIVE_INFINITE:
            if self._end.kind == BoundKind.NEGATIVE_INFINITE:
                return EmptyIterable()
            return RepeatIterable(NEG_INF)
        if self._start.kind == BoundKind.POSITIVE_INFINITE:
            return EmptyIterable()
        start = self._start.value
        if (capability := successor_for(start)) is None:
            raise NotIntegerIntervalError(
                f"Unable to enumerate interval of {type(start).__name__}: {self}"
            )
        try:
            first = capability.successor(start) if self._excludes_min else start
        except OverflowError:
            return EmptyIterable()
        _LOGGER.debug("Enumerating %s from %r", self, first)
        return SteppedIterable(
            first, capability.successor, lambda value: self._satisfies_end(Bound.of(value))
        )

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_sequence())

    def reverse(self) -> Iterable[Any]:
        """Return a lazy sequence of the values from the end towards the start.

        An interval with an infinite end produces the infinite sentinel forever.
        """
        if self._end.kind == BoundKind.POSITIVE_INFINITE:
            if self._start.kind == BoundKind.POSITIVE_INFINITE:
                return EmptyIterable()
            return RepeatIterable(INF)
        if self._end.kind == BoundKind.NEGATIVE_INFINITE:
            return EmptyIterable()
        capability = self._require_discrete()
        if (bounds := self._effective_bounds(capability)) is None:
            return EmptyIterable()
        _, last = bounds
        return SteppedIterable(
            last,
            capability.predecessor,
            lambda value: self._satisfies_start(Bound.of(value)),
        )

    def sum(self) -> int:
        """Return the sum of a finite integer interval without enumerating it."""
        count = self.element_count()
        if not isinstance(self._start.value, int):
            raise NotIntegerIntervalError(f"Unable to sum non-integer interval: {self}")
        if not count:
            return 0
        first, last = self.effective_bounds()
        return count * (first + last) // 2

    def pick(
        self, count: Optional[int] = None, rng: Optional[random.Random] = None
    ) -> Any:
        """Draw distinct values uniformly at random.

        With no count a single value (or None for an empty interval) is
        returned, otherwise a list of up to `count` distinct values. Positions
        are sampled from a lazy range so the values are never materialized.
        """
        rng = rng or random.Random()
        total = self.element_count()
        if count is None:
            return self.at(rng.randrange(total)) if total else None
        positions = rng.sample(range(total), min(count, total))
        return [self.at(position) for position in positions]

    def roll(
        self, count: Optional[int] = None, rng: Optional[random.Random] = None
    ) -> Any:
        """Draw values uniformly at random with replacement."""
        rng = rng or random.Random()
        total = self.element_count()
        if count is None:
            return self.at(rng.randrange(total)) if total else None
        if not total:
            return []
        return [self.at(rng.randrange(total)) for _ in range(count)]

    def rand(self, rng: Optional[random.Random] = None) -> float:
        """Draw a real number uniformly from a finite numeric interval."""
        if self.infinite:
            raise IntervalError(f"Unable to draw from infinite interval: {self}")
        if not all(_is_numeric(value) for value in self._finite_values()):
            raise IntervalError(f"Unable to draw from non-numeric interval: {self}")
        if not self._spans():
            raise IntervalError(f"Unable to draw from empty interval: {self}")
        rng = rng or random.Random()
        low, high = float(self._start.value), float(self._end.value)
        while True:
            if (value := rng.uniform(low, high)) in self:
                return value

    def _apply(self, op: Callable[[Any, Any], Any], operand: Any) -> Interval[Any]:
        return Interval(
            self._start.apply(op, operand),
            self._end.apply(op, operand),
            excludes_min=self._excludes_min,
            excludes_max=self._excludes_max,
        )

    def __add__(self, other: Any) -> Interval[Any]:
        if isinstance(other, Interval):
            return NotImplemented
        return self._apply(operator.add, other)

    __radd__ = __add__

    def __sub__(self, other: Any) -> Interval[Any]:
        if isinstance(other, Interval):
            return NotImplemented
        return self._apply(operator.sub, other)

    def __mul__(self, other: Any) -> Interval[Any]:
        if isinstance(other, Interval):
            return NotImplemented
        return self._apply(operator.mul, other)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Interval[Any]:
        if isinstance(other, Interval):
            return NotImplemented
        return self._apply(operator.truediv, other)

    def cmp(self, other: Any) -> int:
        """Three way comparison of (start, end) with another value.

        A scalar is compared as the interval from the scalar to itself, and a
        pair is compared as the interval between its two values.
        """
        if isinstance(other, Interval):
            start, end = other._start, other._end
        elif (
            isinstance(other, Sequence)
            and not isinstance(other, str)
            and len(other) == 2
        ):
            start, end = Bound.of(self._coerce(other[0])), Bound.of(self._coerce(other[1]))
        else:
            start = end = Bound.of(self._coerce(other))
        return self._start.compare(start) or self._end.compare(end)

    def __lt__(self, other: Any) -> bool:
        return self.cmp(other) < 0

    def __le__(self, other: Any) -> bool:
        return self.cmp(other) <= 0

    def __gt__(self, other: Any) -> bool:
        return self.cmp(other) > 0

    def __ge__(self, other: Any) -> bool:
        return self.cmp(other) >= 0

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return (
            self._start == other._start
            and self._end == other._end
            and self._excludes_min == other.excludes_min
            and self._excludes_max == other.excludes_max
        )

    def __hash__(self) -> int:
        return hash((self._start, self._end, self._excludes_min, self._excludes_max))

    def __str__(self) -> str:
        return (
            f"{self._start}{'^' if self._excludes_min else ''}"
            f"..{'^' if self._excludes_max else ''}{self._end}"
        )

    def __repr__(self) -> str:
        return f"Interval({self})"
