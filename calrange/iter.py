"""Library for lazy sequences used by intervals.

An interval never materializes its elements. Instead it returns one of the
iterables here, which produce elements one at a time by repeatedly applying a
step function (a successor or predecessor) from a first element.

Every call to `iter()` starts a fresh traversal with its own cursor, so the
same sequence can be consumed several times, and an infinite sequence can be
abandoned at any point by no longer asking for elements.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import TypeVar

__all__ = [
    "SteppedIterable",
    "RepeatIterable",
    "EmptyIterable",
]

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class SteppedIterable(Iterable[T]):
    """A sequence produced by stepping from a first element while in range."""

    def __init__(
        self,
        first: T,
        step: Callable[[T], T],
        within: Callable[[T], bool],
    ) -> None:
        """Initialize SteppedIterable."""
        self._first = first
        self._step = step
        self._within = within

    def __iter__(self) -> Iterator[T]:
        """Return an iterator that steps until an element is out of range.

        The traversal also ends when the step leaves the range of the element
        type.
        """
        value = self._first
        while self._within(value):
            yield value
            try:
                value = self._step(value)
            except OverflowError:
                return

    def __repr__(self) -> str:
        return f"SteppedIterable(first={self._first!r})"


class RepeatIterable(Iterable[T]):
    """An infinite sequence of the same value.

    This is produced when enumerating from an infinite bound, where every
    element is the infinite sentinel itself.
    """

    def __init__(self, value: T) -> None:
        """Initialize RepeatIterable."""
        self._value = value

    def __iter__(self) -> Iterator[T]:
        """Return an iterator that repeats the value forever."""
        _LOGGER.debug("Repeating degenerate sequence of %s", self._value)
        return itertools.repeat(self._value)

    def __repr__(self) -> str:
        return f"RepeatIterable({self._value!r})"


class EmptyIterable(Iterable[T]):
    """A sequence without elements."""

    def __iter__(self) -> Iterator[T]:
        """Return an exhausted iterator."""
        return iter(())

    def __repr__(self) -> str:
        return "EmptyIterable()"
