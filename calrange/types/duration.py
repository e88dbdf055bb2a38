"""Library for a signed, fractional quantity of seconds."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union

from calrange.util import to_decimal

__all__ = ["Duration"]

_MICROSECOND = Decimal("0.000001")

Real = Union[int, float, Decimal]


@dataclass(frozen=True, order=True)
class Duration:
    """A length of time in seconds.

    The difference of two instants is a Duration, and a Duration can be
    added to or subtracted from an instant. Seconds are kept as an exact
    Decimal so that sums of fractional durations do not accumulate error.
    """

    seconds: Decimal
    """Number of seconds, negative for a duration pointing backwards in time."""

    def __init__(self, seconds: Any = 0) -> None:
        """Initialize Duration from any real number of seconds."""
        object.__setattr__(self, "seconds", to_decimal(seconds))

    @classmethod
    def of(
        cls,
        days: Real = 0,
        hours: Real = 0,
        minutes: Real = 0,
        seconds: Real = 0,
    ) -> Duration:
        """Create a Duration from a mix of units."""
        return cls(
            to_decimal(days) * 86400
            + to_decimal(hours) * 3600
            + to_decimal(minutes) * 60
            + to_decimal(seconds)
        )

    @classmethod
    def from_timedelta(cls, value: datetime.timedelta) -> Duration:
        """Create a Duration from a stdlib timedelta."""
        return cls(
            Decimal(value.days) * 86400
            + Decimal(value.seconds)
            + Decimal(value.microseconds) * _MICROSECOND
        )

    def as_timedelta(self) -> datetime.timedelta:
        """Return the Duration as a timedelta, rounded to microseconds."""
        micros = self.seconds.quantize(_MICROSECOND)
        return datetime.timedelta(microseconds=int(micros / _MICROSECOND))

    def __add__(self, other: Any) -> Duration:
        if isinstance(other, Duration):
            return Duration(self.seconds + other.seconds)
        if isinstance(other, datetime.timedelta):
            return self + Duration.from_timedelta(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Any) -> Duration:
        if isinstance(other, Duration):
            return Duration(self.seconds - other.seconds)
        if isinstance(other, datetime.timedelta):
            return self - Duration.from_timedelta(other)
        return NotImplemented

    def __neg__(self) -> Duration:
        return Duration(-self.seconds)

    def __abs__(self) -> Duration:
        return Duration(abs(self.seconds))

    def __mul__(self, other: Any) -> Duration:
        if isinstance(other, (int, float, Decimal)) and not isinstance(other, bool):
            return Duration(self.seconds * to_decimal(other))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Any:
        """Divide by a number, or by another Duration to get a ratio."""
        if isinstance(other, Duration):
            return self.seconds / other.seconds
        if isinstance(other, (int, float, Decimal)) and not isinstance(other, bool):
            return Duration(self.seconds / to_decimal(other))
        return NotImplemented

    def __bool__(self) -> bool:
        return bool(self.seconds)

    def __float__(self) -> float:
        return float(self.seconds)

    def __str__(self) -> str:
        value = self.seconds.normalize()
        if value == value.to_integral_value():
            return str(int(value))
        return format(value, "f")

    def __repr__(self) -> str:
        return f"Duration({str(self)!r})"
