"""Library for parsing ISO-8601 / RFC-3339 date and time strings.

The accepted grammar is a date, a `T` (or space) separator, a time of day
in extended `HH:MM:SS` or condensed `HHMMSS` form, an optional fraction of
a second introduced by `.` or `,`, and an optional offset of `Z`, `+HHMM`
or `+HH:MM`:

    2015-01-01T03:17:30+0500
    2015-01-01 03:17:30,25Z
    2015-01-01t031730.5-04:00
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from calrange.exceptions import InvalidFormatError
from calrange.types.utc_offset import UtcOffset

__all__ = ["ParsedInstant", "parse_instant"]

_LOGGER = logging.getLogger(__name__)

INSTANT_REGEX = re.compile(
    r"^(?P<year>[+-]?[0-9]{4,})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"[Tt ]"
    r"(?P<hour>[0-9]{2})(?P<sep>:?)(?P<minute>[0-9]{2})(?P=sep)(?P<second>[0-9]{2})"
    r"(?:[.,](?P<fraction>[0-9]+))?"
    r"(?P<offset>[Zz]|[-+][0-9]{2}:?[0-9]{2}(?::?[0-9]{2})?)?$"
)


@dataclass
class ParsedInstant:
    """The civil fields of a parsed string, not yet validated as a date."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: Decimal

    offset: Optional[UtcOffset] = None
    """Offset from the string, or None if the string had no offset."""


def parse_instant(value: str) -> ParsedInstant:
    """Parse a date and time string into its civil fields."""
    if not isinstance(value, str):
        raise InvalidFormatError(f"Expected a date and time string, got {value!r}")
    if not (match := INSTANT_REGEX.fullmatch(value.strip())):
        raise InvalidFormatError(
            f"Expected value to match date and time pattern: {value}",
            detailed_error="Expected YYYY-MM-DDTHH:MM:SS[.fraction][Z|+HH:MM]",
        )
    second = Decimal(match.group("second"))
    if fraction := match.group("fraction"):
        second += Decimal(f"0.{fraction}")
    offset: UtcOffset | None = None
    if offset_value := match.group("offset"):
        try:
            offset = UtcOffset.parse(offset_value)
        except ValueError as err:
            raise InvalidFormatError(
                f"Invalid offset in date and time value: {value}",
                detailed_error=str(err),
            ) from err
    result = ParsedInstant(
        year=int(match.group("year")),
        month=int(match.group("month")),
        day=int(match.group("day")),
        hour=int(match.group("hour")),
        minute=int(match.group("minute")),
        second=second,
        offset=offset,
    )
    _LOGGER.debug("parse_instant returned %s", result)
    return result
