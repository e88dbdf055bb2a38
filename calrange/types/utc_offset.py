"""Library for parsing and encoding fixed UTC offsets."""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from typing import Any

from calrange.exceptions import InvalidFormatError

__all__ = ["UtcOffset"]

UTC_OFFSET_REGEX = re.compile(
    r"^(?:([Zz])|([-+])([0-9]{2}):?([0-9]{2})(?::?([0-9]{2}))?)$"
)
MAX_OFFSET_SECONDS = 86400


@dataclass(frozen=True)
class UtcOffset:
    """Contains an offset from UTC to local time in seconds."""

    seconds: int = 0

    def __post_init__(self) -> None:
        """Verify the offset is less than a day in either direction."""
        if not -MAX_OFFSET_SECONDS < self.seconds < MAX_OFFSET_SECONDS:
            raise ValueError(f"UTC offset must be within a day, got {self.seconds}s")

    @classmethod
    def parse(cls, value: str) -> UtcOffset:
        """Parse a UTC offset of the form Z, +HHMM, +HH:MM or +HH:MM:SS."""
        if not (match := UTC_OFFSET_REGEX.fullmatch(value)):
            raise InvalidFormatError(
                f"Expected value to match UTC offset pattern: {value}"
            )
        zulu, sign, hours, minutes, seconds = match.groups()
        if zulu:
            return UtcOffset(0)
        if int(minutes) > 59 or int(seconds or 0) > 59:
            raise InvalidFormatError(f"UTC offset minutes out of range: {value}")
        result = int(hours) * 3600 + int(minutes) * 60 + int(seconds or 0)
        if sign == "-":
            result = -result
        return UtcOffset(result)

    @classmethod
    def of(cls, value: Any) -> UtcOffset:
        """Coerce seconds, a timedelta or an offset string into a UtcOffset."""
        if isinstance(value, UtcOffset):
            return value
        if isinstance(value, datetime.timedelta):
            return UtcOffset(int(value.total_seconds()))
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return UtcOffset(value)
        raise TypeError(f"Expected UTC offset in seconds, got {value!r}")

    @property
    def minutes(self) -> float:
        """Return the offset scaled to minutes."""
        return self.seconds / 60

    @property
    def hours(self) -> float:
        """Return the offset scaled to hours."""
        return self.seconds / 3600

    def as_timezone(self) -> datetime.timezone:
        """Return a stdlib fixed offset timezone."""
        return datetime.timezone(datetime.timedelta(seconds=self.seconds))

    def format(self, extended: bool = False, zulu: bool = True) -> str:
        """Encode the offset, using Z for UTC unless disabled.

        The extended form separates hours and minutes with a colon.
        """
        if zulu and not self.seconds:
            return "Z"
        parts = []
        seconds = self.seconds
        if seconds < 0:
            parts.append("-")
            seconds = -seconds
        else:
            parts.append("+")
        hours = int(seconds / 3600)
        seconds %= 3600
        minutes = int(seconds / 60)
        seconds %= 60
        sep = ":" if extended else ""
        parts.append(f"{hours:02}{sep}{minutes:02}")
        if seconds:
            parts.append(f"{sep}{seconds:02}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.format()
