"""A civil date and time with a fixed UTC offset.

A `CivilInstant` is the human facing calendar and clock representation of a
single point in time: year, month, day, hour, minute and a fractional second,
plus a fixed offset from UTC in seconds. There is no notion of a named timezone
or daylight savings time, only the offset.

Each instant also denotes an absolute instant, a count of seconds since
1970-01-01T00:00:00Z that includes inserted leap seconds. Two instants with
different offsets are equal when their absolute instants are equal.

```python
from calrange.instant import CivilInstant

start = CivilInstant(year=2015, month=11, day=21, hour=16, minute=1)
print(start)                       # 2015-11-21T16:01:00Z
print(start.in_timezone(-18000))   # 2015-11-21T11:01:00-0500
print(start + 90)                  # 2015-11-21T16:02:30Z
```

Instants are immutable. Methods like `clone`, `truncated_to` and
`in_timezone` return a new instant.
"""

from __future__ import annotations

import datetime
import enum
import logging
import math
from decimal import Decimal
from typing import Any, Optional

from dateutil.relativedelta import relativedelta
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .compat import leap_second_compat
from .exceptions import InvalidDateError, TimezoneClashError
from .gregorian import (
    SECONDS_PER_DAY,
    absolute_to_posix,
    civil_from_days,
    day_of_week,
    day_of_year,
    days_from_civil,
    days_in_month,
    is_leap_second_day,
    is_leap_year,
    posix_to_absolute,
)
from .parsing.instant import parse_instant
from .types.duration import Duration
from .types.utc_offset import UtcOffset
from .util import now_factory, to_decimal

__all__ = ["CivilInstant", "TimeUnit"]

_LOGGER = logging.getLogger(__name__)

_CALENDAR_UNITS = ("years", "months", "weeks", "days")
_CLOCK_UNITS = {"hours": 3600, "minutes": 60, "seconds": 1}


class TimeUnit(str, enum.Enum):
    """A unit that an instant can be truncated to."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


def _decompose(local: Decimal) -> dict[str, Any]:
    """Split seconds since the epoch in local time into civil fields."""
    whole = math.floor(local)
    fraction = local - whole
    days, seconds = divmod(whole, SECONDS_PER_DAY)
    hour, seconds = divmod(seconds, 3600)
    minute, second = divmod(seconds, 60)
    year, month, day = civil_from_days(days)
    return {
        "year": year,
        "month": month,
        "day": day,
        "hour": hour,
        "minute": minute,
        "second": Decimal(second) + fraction,
    }


def _format_year(year: int) -> str:
    """Render a year with at least four digits and a sign outside 0 to 9999."""
    if year < 0:
        return f"-{-year:04}"
    if year > 9999:
        return f"+{year}"
    return f"{year:04}"


class CivilInstant(BaseModel):
    """An immutable civil date and time with a fixed UTC offset."""

    model_config = ConfigDict(frozen=True)

    year: int
    """Year in the proleptic Gregorian calendar, may be zero or negative."""

    month: int = Field(default=1, ge=1, le=12)
    """Month of the year between 1 and 12."""

    day: int = Field(default=1, ge=1)
    """Day of the month, bounded by the length of the month."""

    hour: int = Field(default=0, ge=0, le=23)
    """Hour of the day between 0 and 23."""

    minute: int = Field(default=0, ge=0, le=59)
    """Minute of the hour between 0 and 59."""

    second: Decimal = Field(default=Decimal(0), ge=0, lt=61)
    """Fractional second, at least 60 only during a leap second."""

    offset: int = 0
    """Offset from UTC in seconds, added to UTC to get the local time."""

    def __init__(
        self,
        year: int,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: Any = 0,
        offset: Any = 0,
    ) -> None:
        """Create an instant from civil fields, raising InvalidDateError if invalid."""
        try:
            super().__init__(
                year=year,
                month=month,
                day=day,
                hour=hour,
                minute=minute,
                second=second,
                offset=offset,
            )
        except ValidationError as err:
            messages = "; ".join(
                f"{'.'.join(str(loc) for loc in error['loc']) or 'instant'}: {error['msg']}"
                for error in err.errors()
            )
            raise InvalidDateError(f"Invalid date and time: {messages}") from err

    @field_validator("second", mode="before")
    @classmethod
    def _parse_second(cls, value: Any) -> Decimal:
        """Convert floats through their repr so 30.1 stays 30.1."""
        try:
            return to_decimal(value)
        except (TypeError, ArithmeticError) as err:
            raise ValueError(f"Expected a number of seconds, got {value!r}") from err

    @field_validator("offset", mode="before")
    @classmethod
    def _parse_offset(cls, value: Any) -> int:
        """Accept seconds, a timedelta, a UtcOffset or an offset string."""
        try:
            return UtcOffset.of(value).seconds
        except TypeError as err:
            raise ValueError(str(err)) from err

    @model_validator(mode="after")
    def _validate_civil_date(self) -> CivilInstant:
        """Verify the day exists in the month and any leap second is real."""
        if self.day > (last_day := days_in_month(self.year, self.month)):
            raise ValueError(
                f"Day {self.day} is out of range for {self.year}-{self.month:02} "
                f"which has {last_day} days"
            )
        if self.second >= 60:
            self._validate_leap_second()
        return self

    def _validate_leap_second(self) -> None:
        """Verify a second of 60 is the last second of a UTC day."""
        if self.offset % 60:
            raise ValueError("A leap second requires an offset in whole minutes")
        utc_minutes = (
            self._days() * 1440 + self.hour * 60 + self.minute - self.offset // 60
        )
        utc_day, minute_of_day = divmod(utc_minutes, 1440)
        if minute_of_day != 1439:
            raise ValueError(
                "A second of 60 is only allowed in the last minute of a UTC day"
            )
        if leap_second_compat.is_unlisted_leap_seconds_enabled():
            _LOGGER.debug("Allowing unlisted leap second on UTC day %s", utc_day)
            return
        if not is_leap_second_day(utc_day):
            year, month, day = civil_from_days(utc_day)
            raise ValueError(
                f"There was no leap second at the end of {_format_year(year)}-{month:02}-{day:02}"
            )

    @classmethod
    def from_date(
        cls,
        date: datetime.date,
        hour: int = 0,
        minute: int = 0,
        second: Any = 0,
        offset: Any = 0,
    ) -> CivilInstant:
        """Create an instant from a date and a time of day."""
        return cls(date.year, date.month, date.day, hour, minute, second, offset)

    @classmethod
    def from_posix(cls, timestamp: Any, offset: Any = 0) -> CivilInstant:
        """Create an instant from seconds since the epoch, ignoring leap seconds."""
        offset_seconds = UtcOffset.of(offset).seconds
        fields = _decompose(to_decimal(timestamp) + offset_seconds)
        return cls(**fields, offset=offset_seconds)

    @classmethod
    def from_instant(cls, instant: Any, offset: Any = 0) -> CivilInstant:
        """Create an instant from an absolute instant in the given offset."""
        posix, leap_second = absolute_to_posix(to_decimal(instant))
        return cls._from_posix_value(posix, UtcOffset.of(offset).seconds, leap_second)

    @classmethod
    def _from_posix_value(
        cls, posix: Decimal, offset: int, leap_second: bool
    ) -> CivilInstant:
        """Create an instant, placing a leap second before the following midnight."""
        if not leap_second:
            return cls(**_decompose(posix + offset), offset=offset)
        if offset % 60:
            raise InvalidDateError("A leap second requires an offset in whole minutes")
        fields = _decompose(posix - 1 + offset)
        fields["second"] += 1
        _LOGGER.debug("Rendering leap second %s in offset %s", posix, offset)
        return cls(**fields, offset=offset)

    @classmethod
    def parse(cls, value: str, offset: Optional[Any] = None) -> CivilInstant:
        """Parse an ISO-8601 / RFC-3339 date and time string.

        The offset argument is only used for strings without an offset of their
        own. Passing both is an error since the offset would be ambiguous.
        """
        parsed = parse_instant(value)
        if parsed.offset is not None and offset is not None:
            raise TimezoneClashError(
                f"Offset given both in the value '{value}' and as an argument ({offset})"
            )
        if parsed.offset is not None:
            offset = parsed.offset.seconds
        return cls(
            parsed.year,
            parsed.month,
            parsed.day,
            parsed.hour,
            parsed.minute,
            parsed.second,
            offset or 0,
        )

    @classmethod
    def now(cls, offset: Any = 0) -> CivilInstant:
        """Return the current time in the given offset."""
        value = now_factory()
        utc_offset = value.utcoffset() or datetime.timedelta(0)
        current = cls(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            Decimal(value.second) + Decimal(value.microsecond) / 1000000,
            int(utc_offset.total_seconds()),
        )
        return current.in_timezone(offset)

    def _days(self) -> int:
        """Return the local date as days since 1970-01-01."""
        return days_from_civil(self.year, self.month, self.day)

    @property
    def is_leap_second(self) -> bool:
        """Return True if this instant is during an inserted leap second."""
        return self.second >= 60

    @property
    def whole_second(self) -> int:
        """Return the second without its fraction."""
        return math.floor(self.second)

    @property
    def offset_in_minutes(self) -> float:
        """Return the UTC offset scaled to minutes."""
        return UtcOffset(self.offset).minutes

    @property
    def offset_in_hours(self) -> float:
        """Return the UTC offset scaled to hours."""
        return UtcOffset(self.offset).hours

    @property
    def day_of_week(self) -> int:
        """Return the day of week, 1 for Monday through 7 for Sunday."""
        return day_of_week(self._days())

    @property
    def day_of_year(self) -> int:
        """Return the day of the year, 1 for January 1st."""
        return day_of_year(self.year, self.month, self.day)

    @property
    def is_leap_year(self) -> bool:
        """Return True if the year of this instant is a leap year."""
        return is_leap_year(self.year)

    @property
    def days_in_month(self) -> int:
        """Return the number of days in the month of this instant."""
        return days_in_month(self.year, self.month)

    def to_date(self) -> datetime.date:
        """Return the local date, dropping the time of day."""
        try:
            return datetime.date(self.year, self.month, self.day)
        except ValueError as err:
            raise InvalidDateError(
                f"Year {self.year} is out of range for datetime.date"
            ) from err

    def to_datetime(self) -> datetime.datetime:
        """Return an aware stdlib datetime, truncated to microseconds."""
        if self.is_leap_second:
            raise InvalidDateError(f"Unable to represent leap second {self} as datetime")
        micros = int((self.second - self.whole_second) * 1000000)
        return datetime.datetime.combine(
            self.to_date(),
            datetime.time(self.hour, self.minute, self.whole_second, micros),
            tzinfo=UtcOffset(self.offset).as_timezone(),
        )

    def to_posix(self, ignore_offset: bool = False) -> Decimal:
        """Return the POSIX timestamp of this instant.

        With `ignore_offset` the civil fields are read as if they were UTC. A
        leap second has the timestamp of the midnight after it plus its fraction.
        """
        local = (
            Decimal(self._days() * SECONDS_PER_DAY + self.hour * 3600 + self.minute * 60)
            + self.second
        )
        if ignore_offset:
            return local
        return local - self.offset

    def to_absolute_instant(self) -> Decimal:
        """Return the seconds since 1970-01-01T00:00:00Z including leap seconds."""
        return posix_to_absolute(self.to_posix(), leap_second=self.is_leap_second)

    def clone(self, **overrides: Any) -> CivilInstant:
        """Return a copy with some civil fields replaced, validated again."""
        fields = self.model_dump()
        fields.update(overrides)
        return CivilInstant(**fields)

    def truncated_to(self, unit: TimeUnit | str) -> CivilInstant:
        """Return a copy with all fields smaller than the unit reset."""
        unit = TimeUnit(unit)
        if unit == TimeUnit.SECOND:
            return self.clone(second=self.whole_second)
        if unit == TimeUnit.MINUTE:
            return self.clone(second=0)
        if unit == TimeUnit.HOUR:
            return self.clone(minute=0, second=0)
        if unit == TimeUnit.DAY:
            return self.clone(hour=0, minute=0, second=0)
        if unit == TimeUnit.WEEK:
            year, month, day = civil_from_days(self._days() - self.day_of_week + 1)
            return self.clone(
                year=year, month=month, day=day, hour=0, minute=0, second=0
            )
        if unit == TimeUnit.MONTH:
            return self.clone(day=1, hour=0, minute=0, second=0)
        return self.clone(month=1, day=1, hour=0, minute=0, second=0)

    def to_utc(self) -> CivilInstant:
        """Return the same absolute instant with an offset of zero."""
        return self.in_timezone(0)

    def in_timezone(self, offset: Any) -> CivilInstant:
        """Return the same absolute instant with civil fields in another offset."""
        return self._from_posix_value(
            self.to_posix(), UtcOffset.of(offset).seconds, self.is_leap_second
        )

    def later(self, **units: Any) -> CivilInstant:
        """Return an instant moved forward by calendar and clock units.

        Calendar units (years, months, weeks, days) keep the time of day and
        clip the day to the end of a shorter month. Clock units (hours, minutes,
        seconds) are then added as an exact duration.
        """
        if unknown := set(units) - set(_CALENDAR_UNITS) - set(_CLOCK_UNITS):
            raise TypeError(f"Unknown time units: {', '.join(sorted(unknown))}")
        result = self
        calendar = {unit: units[unit] for unit in _CALENDAR_UNITS if unit in units}
        if calendar:
            try:
                date = self.to_date() + relativedelta(**calendar)
            except (ValueError, OverflowError) as err:
                raise InvalidDateError(f"Unable to move {self} by {calendar}") from err
            result = result.clone(year=date.year, month=date.month, day=date.day)
        seconds = sum(
            to_decimal(units[unit]) * scale
            for unit, scale in _CLOCK_UNITS.items()
            if unit in units
        )
        if seconds:
            result = result + Duration(seconds)
        return result

    def earlier(self, **units: Any) -> CivilInstant:
        """Return an instant moved backward by calendar and clock units."""
        return self.later(**{unit: -value for unit, value in units.items()})

    def isoformat(self, extended_offset: bool = False) -> str:
        """Render as YYYY-MM-DDThh:mm:ss[.fraction] with a Z or numeric offset."""
        whole = self.whole_second
        fraction = ""
        if remainder := self.second - whole:
            fraction = format(remainder.normalize(), "f")[1:]
        return (
            f"{_format_year(self.year)}-{self.month:02}-{self.day:02}"
            f"T{self.hour:02}:{self.minute:02}:{whole:02}{fraction}"
            f"{UtcOffset(self.offset).format(extended=extended_offset)}"
        )

    def __str__(self) -> str:
        return self.isoformat()

    def __add__(self, other: Any) -> CivilInstant:
        if isinstance(other, datetime.timedelta):
            other = Duration.from_timedelta(other)
        elif isinstance(other, (int, float, Decimal)) and not isinstance(other, bool):
            other = Duration(other)
        if not isinstance(other, Duration):
            return NotImplemented
        return CivilInstant.from_instant(
            self.to_absolute_instant() + other.seconds, self.offset
        )

    __radd__ = __add__

    def __sub__(self, other: Any) -> Any:
        """Subtract a duration, or another instant to get the Duration between."""
        if isinstance(other, CivilInstant):
            return Duration(self.to_absolute_instant() - other.to_absolute_instant())
        if isinstance(other, datetime.timedelta):
            other = Duration.from_timedelta(other)
        elif isinstance(other, (int, float, Decimal)) and not isinstance(other, bool):
            other = Duration(other)
        if not isinstance(other, Duration):
            return NotImplemented
        return self + (-other)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, CivilInstant):
            return NotImplemented
        return self.to_absolute_instant() == other.to_absolute_instant()

    def __hash__(self) -> int:
        return hash(self.to_absolute_instant())

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, CivilInstant):
            return NotImplemented
        return self.to_absolute_instant() < other.to_absolute_instant()

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, CivilInstant):
            return NotImplemented
        return self.to_absolute_instant() > other.to_absolute_instant()

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, CivilInstant):
            return NotImplemented
        return self.to_absolute_instant() <= other.to_absolute_instant()

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, CivilInstant):
            return NotImplemented
        return self.to_absolute_instant() >= other.to_absolute_instant()
