"""Library for the capabilities an interval needs from its element type.

An interval only needs its bounds to be ordered for membership, overlap and
comparison. Producing a sequence needs a `Successor`, and counting or indexing
needs the full `Discrete` capability: a successor, a predecessor and a distance
between two elements.

Capabilities are registered for an exact python type, so `bool` is not treated
as an integer and `datetime.datetime` is not treated as a `datetime.date`.

Stepping past the first or last value of a bounded type (codepoints and dates)
raises `OverflowError`.
"""

from __future__ import annotations

import datetime
import logging
import sys
import unicodedata
from collections.abc import Callable
from decimal import Decimal
from fractions import Fraction
from typing import Any, Protocol, TypeVar

from calrange.exceptions import SyntheticCodepointError

__all__ = [
    "Successor",
    "Discrete",
    "ELEMENT_TYPE",
    "check_codepoints",
    "successor_for",
    "discrete_for",
]

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
T_TYPE = TypeVar("T_TYPE", bound=type)


class Successor(Protocol[T]):
    """Defines the protocol for stepping to the next element."""

    def successor(self, value: T) -> T:
        """Return the element that follows the value."""


class Discrete(Successor[T], Protocol):
    """Defines the protocol for element types that can be counted."""

    def predecessor(self, value: T) -> T:
        """Return the element that precedes the value."""

    def distance(self, start: T, end: T) -> int:
        """Return the number of successor steps from start to end."""

    def advance(self, value: T, steps: int) -> T:
        """Return the element the given number of successor steps away."""


class Registry:
    """Registry of element type capabilities."""

    def __init__(self) -> None:
        """Initialize Registry."""
        self._successor: dict[type, Successor[Any]] = {}
        self._discrete: dict[type, Discrete[Any]] = {}

    def register(self, *types: type) -> Callable[[T_TYPE], T_TYPE]:
        """Return decorator to register a capability class for python types.

        The class is registered as `Discrete` if it implements `distance`,
        otherwise only as a `Successor`.
        """

        def decorator(func: T_TYPE) -> T_TYPE:
            """Register decorated class."""
            capability = func()
            for element_type in types:
                self._successor[element_type] = capability
                if hasattr(capability, "distance"):
                    self._discrete[element_type] = capability
            return func

        return decorator

    def successor(self, value: Any) -> Successor[Any] | None:
        """Return the successor capability for the value, if any."""
        if isinstance(value, str) and len(value) != 1:
            return None
        return self._successor.get(type(value))

    def discrete(self, value: Any) -> Discrete[Any] | None:
        """Return the discrete capability for the value, if any."""
        if (capability := self._discrete.get(type(value))) is None:
            return None
        if isinstance(value, str) and len(value) != 1:
            return None
        return capability


ELEMENT_TYPE = Registry()


def check_codepoints(value: str) -> None:
    """Raise if the text contains combining codepoints.

    A base character followed by combining marks renders as one character
    but has no codepoint successor of its own.
    """
    if any(unicodedata.combining(char) for char in value):
        raise SyntheticCodepointError(
            f"Cannot enumerate text built from combining codepoints: {value!r}"
        )


@ELEMENT_TYPE.register(int)
class IntegerElement:
    """Integers step by one."""

    def successor(self, value: int) -> int:
        return value + 1

    def predecessor(self, value: int) -> int:
        return value - 1

    def distance(self, start: int, end: int) -> int:
        return end - start

    def advance(self, value: int, steps: int) -> int:
        return value + steps


@ELEMENT_TYPE.register(str)
class CharacterElement:
    """Single characters step through codepoints."""

    def successor(self, value: str) -> str:
        return self.advance(value, 1)

    def predecessor(self, value: str) -> str:
        return self.advance(value, -1)

    def distance(self, start: str, end: str) -> int:
        return ord(end) - ord(start)

    def advance(self, value: str, steps: int) -> str:
        codepoint = ord(value) + steps
        if not 0 <= codepoint <= sys.maxunicode:
            raise OverflowError(f"Codepoint out of range stepping {value!r} by {steps}")
        return chr(codepoint)


@ELEMENT_TYPE.register(datetime.date)
class DateElement:
    """Dates step by one day."""

    def successor(self, value: datetime.date) -> datetime.date:
        return value + datetime.timedelta(days=1)

    def predecessor(self, value: datetime.date) -> datetime.date:
        return value - datetime.timedelta(days=1)

    def distance(self, start: datetime.date, end: datetime.date) -> int:
        return (end - start).days

    def advance(self, value: datetime.date, steps: int) -> datetime.date:
        return value + datetime.timedelta(days=steps)


@ELEMENT_TYPE.register(float, Decimal, Fraction)
class RealElement:
    """Real numbers step by one but can't be counted."""

    def successor(self, value: Any) -> Any:
        return value + 1


def successor_for(value: Any) -> Successor[Any] | None:
    """Return the successor capability for a value of the element type."""
    return ELEMENT_TYPE.successor(value)


def discrete_for(value: Any) -> Discrete[Any] | None:
    """Return the discrete capability for a value of the element type."""
    capability = ELEMENT_TYPE.discrete(value)
    _LOGGER.debug("Discrete capability for %r: %s", value, capability)
    return capability
