"""Resolve loosely typed period inputs to concrete date, datetime or month spans.

The frame helpers accept a year, a month, a date, a datetime or a string
wherever a period is expected.  The functions here turn any of those into an
inclusive ``(start, end)`` pair in the temporal unit a frequency needs:

* :func:`resolve_date_range` for daily data,
* :func:`resolve_datetime_range` for hourly data (always UTC),
* :func:`resolve_month_range` for monthly data.

Strings are tried against these layouts in order, first match wins:

1. RFC 3339 with ``Z`` or a numeric offset (``2023-05-01T12:00:00+02:00``),
2. the same with a space instead of ``T``,
3. ``YYYY-MM-DD HH:MM:SS`` (taken as UTC),
4. ``YYYY-MM-DD``.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Union

from .exceptions import DateParsingError


@dataclass(frozen=True, order=True)
class Year:
    """A calendar year."""

    year: int


@dataclass(frozen=True, order=True)
class Month:
    """A calendar month of a given year.

    Raises:
        ValueError: If *month* is outside ``1..12``.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            msg = f"Month must be in 1..12, got {self.month}"
            raise ValueError(msg)

    @classmethod
    def of(cls, day: date) -> Month:
        """The month containing *day*."""
        return cls(day.year, day.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, days_in_month(self.year, self.month))


@dataclass(frozen=True)
class DateSpan:
    """Inclusive range of calendar days."""

    start: date
    end: date


@dataclass(frozen=True)
class DateTimeSpan:
    """Inclusive range of UTC instants."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class MonthSpan:
    """Inclusive range of months."""

    start: Month
    end: Month


PeriodLike = Union[Year, Month, date, datetime, str, int]

_DAY_END = time(23, 59, 59, 999999)

_AWARE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S.%f%z",
)
_NAIVE_FORMAT = "%Y-%m-%d %H:%M:%S"
_DATE_FORMAT = "%Y-%m-%d"


def days_in_month(year: int, month: int) -> int:
    """Number of days in *month* of *year* (28 to 31).

    Raises:
        ValueError: If *month* is outside ``1..12``.
    """
    if not 1 <= month <= 12:
        msg = f"Month must be in 1..12, got {month}"
        raise ValueError(msg)
    return calendar.monthrange(year, month)[1]


def to_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC; aware ones are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime_string(text: str) -> datetime | date:
    """Parse *text* as a UTC datetime, or as a date if it carries no time.

    Raises:
        DateParsingError: If no supported layout matches.
    """
    s = text.strip()
    for fmt in _AWARE_FORMATS:
        try:
            return datetime.strptime(s, fmt).astimezone(timezone.utc)
        except ValueError:
            continue
    try:
        return datetime.strptime(s, _NAIVE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        pass
    try:
        return datetime.strptime(s, _DATE_FORMAT).date()
    except ValueError:
        raise DateParsingError(text) from None


def _normalize(value: PeriodLike) -> Year | Month | date | datetime:
    if isinstance(value, bool):
        raise DateParsingError(value)
    if isinstance(value, int):
        return Year(value)
    if isinstance(value, str):
        return parse_datetime_string(value)
    if isinstance(value, (Year, Month, date)):
        return value
    raise DateParsingError(value)


def resolve_date_range(value: PeriodLike) -> DateSpan:
    """Resolve *value* to an inclusive range of days.

    A year covers Jan 1 to Dec 31, a month its first to last day, a date or
    datetime just its own (UTC) day.

    Raises:
        DateParsingError: If *value* cannot be interpreted.
    """
    v = _normalize(value)
    if isinstance(v, Year):
        try:
            return DateSpan(date(v.year, 1, 1), date(v.year, 12, 31))
        except ValueError:
            raise DateParsingError(value) from None
    if isinstance(v, Month):
        return DateSpan(v.first_day, v.last_day)
    if isinstance(v, datetime):
        day = to_utc(v).date()
        return DateSpan(day, day)
    return DateSpan(v, v)


def resolve_datetime_range(value: PeriodLike) -> DateTimeSpan:
    """Resolve *value* to an inclusive range of UTC instants.

    Years, months and dates span from midnight of their first day to the
    last microsecond of their last day.  A datetime resolves to itself.

    Raises:
        DateParsingError: If *value* cannot be interpreted.
    """
    v = _normalize(value)
    if isinstance(v, datetime):
        instant = to_utc(v)
        return DateTimeSpan(instant, instant)
    days = resolve_date_range(v)
    return DateTimeSpan(
        datetime.combine(days.start, time(0), tzinfo=timezone.utc),
        datetime.combine(days.end, _DAY_END, tzinfo=timezone.utc),
    )


def resolve_month_range(value: PeriodLike) -> MonthSpan:
    """Resolve *value* to an inclusive range of months.

    A year covers January to December; anything finer resolves to the month
    that contains it.

    Raises:
        DateParsingError: If *value* cannot be interpreted.
    """
    v = _normalize(value)
    if isinstance(v, Year):
        return MonthSpan(Month(v.year, 1), Month(v.year, 12))
    if isinstance(v, Month):
        return MonthSpan(v, v)
    if isinstance(v, datetime):
        v = to_utc(v).date()
    month = Month.of(v)
    return MonthSpan(month, month)
