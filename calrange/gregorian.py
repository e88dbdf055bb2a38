"""Proleptic Gregorian calendar arithmetic.

Days are counted relative to the POSIX epoch (1970-01-01 is day 0) so that
a day number multiplied by 86400 is a POSIX timestamp at midnight UTC. The
conversions work for any integer year, including year 0 and negative years.

The absolute time scale used by `calrange.instant` counts leap seconds. The
table below lists the UTC days whose last minute had 61 seconds, and the
helpers convert between POSIX timestamps and the leap second counting scale.
"""

from __future__ import annotations

import bisect
import datetime
import math
from decimal import Decimal
from typing import Union

__all__ = [
    "SECONDS_PER_DAY",
    "is_leap_year",
    "days_in_month",
    "days_from_civil",
    "civil_from_days",
    "day_of_week",
    "day_of_year",
    "LEAP_SECOND_DAYS",
    "is_leap_second_day",
    "posix_to_absolute",
    "absolute_to_posix",
]

SECONDS_PER_DAY = 86400

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

Seconds = Union[int, Decimal]


def is_leap_year(year: int) -> bool:
    """Return True if the year has a February 29th."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the month of the specified year."""
    if not 1 <= month <= 12:
        raise ValueError(f"Expected month between 1 and 12, got {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def days_from_civil(year: int, month: int, day: int) -> int:
    """Return the number of days since 1970-01-01 for the civil date.

    The year is shifted to start in March so that the leap day is the last
    day of the shifted year, and the count is taken in 400 year eras of
    146097 days each.
    """
    if month <= 2:
        year -= 1
    era = year // 400
    year_of_era = year - era * 400
    shifted_month = month - 3 if month > 2 else month + 9
    day_of_shifted_year = (153 * shifted_month + 2) // 5 + day - 1
    day_of_era = (
        year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_shifted_year
    )
    return era * 146097 + day_of_era - 719468


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Return the (year, month, day) for a count of days since 1970-01-01."""
    days += 719468
    era = days // 146097
    day_of_era = days - era * 146097
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_shifted_year = day_of_era - (
        365 * year_of_era + year_of_era // 4 - year_of_era // 100
    )
    shifted_month = (5 * day_of_shifted_year + 2) // 153
    day = day_of_shifted_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400
    if month <= 2:
        year += 1
    return (year, month, day)


def day_of_week(days: int) -> int:
    """Return the ISO day of week (1 is Monday, 7 is Sunday) for a day count."""
    # 1970-01-01 was a Thursday
    return (days + 3) % 7 + 1


def day_of_year(year: int, month: int, day: int) -> int:
    """Return the day of year starting at 1 for January 1st."""
    return days_from_civil(year, month, day) - days_from_civil(year, 1, 1) + 1


LEAP_SECOND_DAYS: tuple[datetime.date, ...] = (
    datetime.date(1972, 6, 30),
    datetime.date(1972, 12, 31),
    datetime.date(1973, 12, 31),
    datetime.date(1974, 12, 31),
    datetime.date(1975, 12, 31),
    datetime.date(1976, 12, 31),
    datetime.date(1977, 12, 31),
    datetime.date(1978, 12, 31),
    datetime.date(1979, 12, 31),
    datetime.date(1981, 6, 30),
    datetime.date(1982, 6, 30),
    datetime.date(1983, 6, 30),
    datetime.date(1985, 6, 30),
    datetime.date(1987, 12, 31),
    datetime.date(1989, 12, 31),
    datetime.date(1990, 12, 31),
    datetime.date(1992, 6, 30),
    datetime.date(1993, 6, 30),
    datetime.date(1994, 6, 30),
    datetime.date(1995, 12, 31),
    datetime.date(1997, 6, 30),
    datetime.date(1998, 12, 31),
    datetime.date(2005, 12, 31),
    datetime.date(2008, 12, 31),
    datetime.date(2012, 6, 30),
    datetime.date(2015, 6, 30),
    datetime.date(2016, 12, 31),
)
"""UTC days that ended with an inserted leap second (23:59:60)."""

# POSIX timestamp of the midnight that follows each leap second.
_LEAP_MIDNIGHTS: tuple[int, ...] = tuple(
    (days_from_civil(day.year, day.month, day.day) + 1) * SECONDS_PER_DAY
    for day in LEAP_SECOND_DAYS
)


def is_leap_second_day(days: int) -> bool:
    """Return True if the UTC day (days since epoch) ended with a leap second."""
    midnight = (days + 1) * SECONDS_PER_DAY
    index = bisect.bisect_left(_LEAP_MIDNIGHTS, midnight)
    return index < len(_LEAP_MIDNIGHTS) and _LEAP_MIDNIGHTS[index] == midnight


def posix_to_absolute(posix: Seconds, leap_second: bool = False) -> Seconds:
    """Convert a POSIX timestamp to the leap second counting scale.

    The POSIX value of a leap second 23:59:60.f is the following midnight
    plus f, so `leap_second` places the value before that midnight instead.
    """
    if leap_second:
        return posix + bisect.bisect_left(_LEAP_MIDNIGHTS, math.floor(posix))
    return posix + bisect.bisect_right(_LEAP_MIDNIGHTS, posix)


def absolute_to_posix(instant: Seconds) -> tuple[Seconds, bool]:
    """Convert a leap second counting value to a POSIX timestamp.

    Returns the POSIX timestamp and whether the instant falls inside an
    inserted leap second, in which case the timestamp is the midnight after
    the leap second plus the fraction of the leap second that has elapsed.
    """
    passed = 0
    for index, midnight in enumerate(_LEAP_MIDNIGHTS):
        leap_start = midnight + index
        if instant < leap_start:
            break
        if instant < leap_start + 1:
            return (instant - index, True)
        passed = index + 1
    return (instant - passed, False)
