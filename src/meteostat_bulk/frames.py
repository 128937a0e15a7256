"""Typed, frequency-aware wrappers around the raw per-station lazy frames.

The frame cache hands out :class:`polars.LazyFrame` objects whose columns are
named positionally (``column_1``, ``column_2``, ...).  The classes here
rename those columns using :attr:`Frequency.columns`, cast them to the types
Meteostat documents, and add convenience filters keyed on time.

Example::

    raw = await client.from_station("10637", Frequency.HOURLY)
    hourly = HourlyFrame.from_raw(raw)
    record = hourly.get_at("2023-06-01 14:20:00").collect_single()
    print(record.temperature, record.condition)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta, timezone
from typing import Any, ClassVar, Generic, TypeVar

import polars as pl

from .condition import WeatherCondition
from .exceptions import ExpectedSingleRowError
from .frequency import Frequency
from .periods import PeriodLike, Year, resolve_date_range, resolve_datetime_range, resolve_month_range
from .records import Climate, Daily, Hourly, Monthly

R = TypeVar("R")
FrameT = TypeVar("FrameT", bound="FrequencyFrame[Any]")


def _rename_positional(raw: pl.LazyFrame, frequency: Frequency) -> pl.LazyFrame:
    """Give positional columns their upstream names; add missing ones as nulls."""
    present = set(raw.collect_schema().names())
    mapping = {f"column_{i}": name for i, name in enumerate(frequency.columns, start=1) if f"column_{i}" in present}
    lf = raw.rename(mapping)
    missing = [name for i, name in enumerate(frequency.columns, start=1) if f"column_{i}" not in present]
    if missing:
        lf = lf.with_columns([pl.lit(None, dtype=pl.String).alias(name) for name in missing])
    return lf.select(list(frequency.columns))


def _casts(floats: Iterable[str], ints: Iterable[str]) -> list[pl.Expr]:
    exprs = [pl.col(c).cast(pl.Float64, strict=False) for c in floats]
    exprs += [pl.col(c).cast(pl.Float64, strict=False).cast(pl.Int64, strict=False) for c in ints]
    return exprs


def _naive_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class FrequencyFrame(Generic[R]):
    """Shared behaviour of the four frequency frames."""

    __slots__ = ("frame",)

    frequency: ClassVar[Frequency]

    def __init__(self, frame: pl.LazyFrame) -> None:
        self.frame = frame

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.frequency})"

    @classmethod
    def from_raw(cls: type[FrameT], raw: pl.LazyFrame) -> FrameT:
        """Wrap a positional-column frame from the frame cache."""
        raise NotImplementedError

    def filter(self: FrameT, predicate: pl.Expr) -> FrameT:
        """Return a new frame restricted to rows matching *predicate*."""
        return type(self)(self.frame.filter(predicate))

    def collect(self) -> pl.DataFrame:
        """Execute the query and return the rows as a :class:`polars.DataFrame`."""
        return self.frame.collect()

    def collect_records(self) -> list[R]:
        """Execute the query and return one typed record per row."""
        df = self.collect()
        return [rec for row in df.iter_rows(named=True) if (rec := self._to_record(row)) is not None]

    def collect_single(self) -> R:
        """Execute the query and return its only row.

        Raises:
            ExpectedSingleRowError: If the query yields zero or several rows.
        """
        df = self.collect()
        if df.height != 1:
            raise ExpectedSingleRowError(df.height)
        record = self._to_record(df.row(0, named=True))
        if record is None:
            raise ExpectedSingleRowError(0)
        return record

    def _to_record(self, row: Mapping[str, Any]) -> R | None:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Hourly
# ---------------------------------------------------------------------------


class HourlyFrame(FrequencyFrame[Hourly]):
    """Hourly observations with a ``datetime`` column (naive, UTC)."""

    __slots__ = ()

    frequency = Frequency.HOURLY

    @classmethod
    def from_raw(cls, raw: pl.LazyFrame) -> HourlyFrame:
        lf = _rename_positional(raw, cls.frequency).with_columns(
            pl.col("date").cast(pl.String).str.to_date("%Y-%m-%d", strict=False),
            *_casts(
                ("temp", "dwpt", "prcp", "wspd", "wpgt", "pres"),
                ("hour", "rhum", "snow", "wdir", "tsun", "coco"),
            ),
        )
        lf = lf.with_columns(
            (pl.col("date").cast(pl.Datetime("us")) + pl.duration(hours=pl.col("hour"))).alias("datetime")
        )
        return cls(lf.select(["datetime", *cls.frequency.columns]))

    def get_range(self, start: PeriodLike, end: PeriodLike) -> HourlyFrame:
        """Rows from the first instant of *start* to the last instant of *end*.

        Raises:
            DateParsingError: If either bound cannot be interpreted.
        """
        lo = _naive_utc(resolve_datetime_range(start).start)
        hi = _naive_utc(resolve_datetime_range(end).end)
        return self.filter(pl.col("datetime").is_between(lo, hi, closed="both"))

    def get_at(self, when: PeriodLike) -> HourlyFrame:
        """The row for the hour nearest *when*; 30 minutes or more rounds up.

        Raises:
            DateParsingError: If *when* cannot be interpreted.
        """
        instant = _naive_utc(resolve_datetime_range(when).start)
        hour_start = instant.replace(minute=0, second=0, microsecond=0)
        if instant.minute >= 30:
            hour_start += timedelta(hours=1)
        return self.filter(pl.col("datetime") == hour_start)

    def get_for_period(self, period: PeriodLike) -> HourlyFrame:
        """Every hour inside *period* (a year, month, day, or string)."""
        span = resolve_datetime_range(period)
        return self.get_range(span.start, span.end)

    def _to_record(self, row: Mapping[str, Any]) -> Hourly | None:
        ts = row["datetime"]
        if ts is None:
            return None
        return Hourly(
            datetime=ts.replace(tzinfo=timezone.utc),
            temperature=row["temp"],
            dew_point=row["dwpt"],
            relative_humidity=row["rhum"],
            precipitation=row["prcp"],
            snow=row["snow"],
            wind_direction=row["wdir"],
            wind_speed=row["wspd"],
            peak_wind_gust=row["wpgt"],
            pressure=row["pres"],
            sunshine_minutes=row["tsun"],
            condition=WeatherCondition.from_code(row["coco"]),
        )


# ---------------------------------------------------------------------------
# Daily
# ---------------------------------------------------------------------------


class DailyFrame(FrequencyFrame[Daily]):
    """Daily observations with a typed ``date`` column."""

    __slots__ = ()

    frequency = Frequency.DAILY

    @classmethod
    def from_raw(cls, raw: pl.LazyFrame) -> DailyFrame:
        lf = _rename_positional(raw, cls.frequency).with_columns(
            pl.col("date").cast(pl.String).str.to_date("%Y-%m-%d", strict=False),
            *_casts(
                ("tavg", "tmin", "tmax", "prcp", "wspd", "wpgt", "pres"),
                ("snow", "wdir", "tsun"),
            ),
        )
        return cls(lf)

    def get_range(self, start: PeriodLike, end: PeriodLike) -> DailyFrame:
        """Rows from the first day of *start* to the last day of *end*."""
        lo = resolve_date_range(start).start
        hi = resolve_date_range(end).end
        return self.filter(pl.col("date").is_between(lo, hi, closed="both"))

    def get_at(self, day: PeriodLike) -> DailyFrame:
        """The row for *day* (the first day, if a longer period is given)."""
        target: date = resolve_date_range(day).start
        return self.filter(pl.col("date") == target)

    def get_for_period(self, period: PeriodLike) -> DailyFrame:
        span = resolve_date_range(period)
        return self.get_range(span.start, span.end)

    def _to_record(self, row: Mapping[str, Any]) -> Daily | None:
        if row["date"] is None:
            return None
        return Daily(
            date=row["date"],
            temp_avg=row["tavg"],
            temp_min=row["tmin"],
            temp_max=row["tmax"],
            precipitation=row["prcp"],
            snow_depth=row["snow"],
            wind_direction_avg=row["wdir"],
            wind_speed_avg=row["wspd"],
            peak_wind_gust=row["wpgt"],
            pressure_avg=row["pres"],
            sunshine_total=row["tsun"],
        )


# ---------------------------------------------------------------------------
# Monthly
# ---------------------------------------------------------------------------


class MonthlyFrame(FrequencyFrame[Monthly]):
    """Monthly aggregates keyed on integer ``year`` and ``month`` columns."""

    __slots__ = ()

    frequency = Frequency.MONTHLY

    @classmethod
    def from_raw(cls, raw: pl.LazyFrame) -> MonthlyFrame:
        lf = _rename_positional(raw, cls.frequency).with_columns(
            *_casts(
                ("tavg", "tmin", "tmax", "prcp", "wspd", "pres"),
                ("year", "month", "tsun"),
            ),
        )
        return cls(lf)

    def get_range(self, start: PeriodLike, end: PeriodLike) -> MonthlyFrame:
        """Rows from the first month of *start* to the last month of *end*."""
        lo = resolve_month_range(start).start
        hi = resolve_month_range(end).end
        year = pl.col("year")
        month = pl.col("month")
        after_start = (year > lo.year) | ((year == lo.year) & (month >= lo.month))
        before_end = (year < hi.year) | ((year == hi.year) & (month <= hi.month))
        return self.filter(after_start & before_end)

    def get_at(self, month: PeriodLike) -> MonthlyFrame:
        """The row for the month containing *month* (or its first month)."""
        target = resolve_month_range(month).start
        return self.filter((pl.col("year") == target.year) & (pl.col("month") == target.month))

    def get_for_period(self, period: PeriodLike) -> MonthlyFrame:
        span = resolve_month_range(period)
        return self.get_range(span.start, span.end)

    def _to_record(self, row: Mapping[str, Any]) -> Monthly | None:
        if row["year"] is None or row["month"] is None:
            return None
        return Monthly(
            year=row["year"],
            month=row["month"],
            temp_avg=row["tavg"],
            temp_min_avg=row["tmin"],
            temp_max_avg=row["tmax"],
            precipitation_total=row["prcp"],
            wind_speed_avg=row["wspd"],
            pressure_avg=row["pres"],
            sunshine_total=row["tsun"],
        )


# ---------------------------------------------------------------------------
# Climate normals
# ---------------------------------------------------------------------------


class ClimateFrame(FrequencyFrame[Climate]):
    """Climate normals keyed on reference period and calendar month."""

    __slots__ = ()

    frequency = Frequency.CLIMATE

    @classmethod
    def from_raw(cls, raw: pl.LazyFrame) -> ClimateFrame:
        lf = _rename_positional(raw, cls.frequency).with_columns(
            *_casts(
                ("tmin", "tmax", "prcp", "wspd", "pres"),
                ("start_year", "end_year", "month", "tsun"),
            ),
        )
        return cls(lf)

    def get_at(self, start_year: Year | int, end_year: Year | int, month: int) -> ClimateFrame:
        """The normals row for *month* over the ``start_year..end_year`` period."""
        y0 = start_year.year if isinstance(start_year, Year) else int(start_year)
        y1 = end_year.year if isinstance(end_year, Year) else int(end_year)
        return self.filter((pl.col("start_year") == y0) & (pl.col("end_year") == y1) & (pl.col("month") == month))

    def _to_record(self, row: Mapping[str, Any]) -> Climate | None:
        if row["start_year"] is None or row["end_year"] is None or row["month"] is None:
            return None
        return Climate(
            start_year=row["start_year"],
            end_year=row["end_year"],
            month=row["month"],
            temp_min_avg=row["tmin"],
            temp_max_avg=row["tmax"],
            precipitation_avg=row["prcp"],
            wind_speed_avg=row["wspd"],
            pressure_avg=row["pres"],
            sunshine_avg=row["tsun"],
        )
