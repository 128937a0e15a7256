"""Typed rows for each frequency, plus flags naming the fields a caller needs."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import date, datetime
from enum import Flag, auto

from .condition import WeatherCondition


def _single_bits(flags: Flag) -> list[Flag]:
    return [m for m in type(flags) if m.value and m.value & (m.value - 1) == 0 and m in flags]


class _RecordMixin:
    def has_required(self, required: Flag) -> bool:
        """Whether every field named by *required* has a value.

        Each flag member maps to the attribute of the same name, in lower case.
        """
        return all(getattr(self, m.name.lower()) is not None for m in _single_bits(required))


# ---------------------------------------------------------------------------
# Field flags
# ---------------------------------------------------------------------------


class HourlyField(Flag):
    NONE = 0
    TEMPERATURE = auto()
    DEW_POINT = auto()
    RELATIVE_HUMIDITY = auto()
    PRECIPITATION = auto()
    SNOW = auto()
    WIND_DIRECTION = auto()
    WIND_SPEED = auto()
    PEAK_WIND_GUST = auto()
    PRESSURE = auto()
    SUNSHINE_MINUTES = auto()
    CONDITION = auto()
    ALL = (
        TEMPERATURE
        | DEW_POINT
        | RELATIVE_HUMIDITY
        | PRECIPITATION
        | SNOW
        | WIND_DIRECTION
        | WIND_SPEED
        | PEAK_WIND_GUST
        | PRESSURE
        | SUNSHINE_MINUTES
        | CONDITION
    )


class DailyField(Flag):
    NONE = 0
    TEMP_AVG = auto()
    TEMP_MIN = auto()
    TEMP_MAX = auto()
    PRECIPITATION = auto()
    SNOW_DEPTH = auto()
    WIND_DIRECTION_AVG = auto()
    WIND_SPEED_AVG = auto()
    PEAK_WIND_GUST = auto()
    PRESSURE_AVG = auto()
    SUNSHINE_TOTAL = auto()
    ALL = (
        TEMP_AVG
        | TEMP_MIN
        | TEMP_MAX
        | PRECIPITATION
        | SNOW_DEPTH
        | WIND_DIRECTION_AVG
        | WIND_SPEED_AVG
        | PEAK_WIND_GUST
        | PRESSURE_AVG
        | SUNSHINE_TOTAL
    )


class MonthlyField(Flag):
    NONE = 0
    TEMP_AVG = auto()
    TEMP_MIN_AVG = auto()
    TEMP_MAX_AVG = auto()
    PRECIPITATION_TOTAL = auto()
    WIND_SPEED_AVG = auto()
    PRESSURE_AVG = auto()
    SUNSHINE_TOTAL = auto()
    ALL = (
        TEMP_AVG | TEMP_MIN_AVG | TEMP_MAX_AVG | PRECIPITATION_TOTAL | WIND_SPEED_AVG | PRESSURE_AVG | SUNSHINE_TOTAL
    )


class ClimateField(Flag):
    NONE = 0
    TEMP_MIN_AVG = auto()
    TEMP_MAX_AVG = auto()
    PRECIPITATION_AVG = auto()
    WIND_SPEED_AVG = auto()
    PRESSURE_AVG = auto()
    SUNSHINE_AVG = auto()
    ALL = TEMP_MIN_AVG | TEMP_MAX_AVG | PRECIPITATION_AVG | WIND_SPEED_AVG | PRESSURE_AVG | SUNSHINE_AVG


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hourly(_RecordMixin):
    """One hour of observations.

    Attributes:
        datetime: Start of the hour, UTC.
        temperature: Air temperature (°C).
        dew_point: Dew point (°C).
        relative_humidity: Relative humidity (%).
        precipitation: One-hour precipitation total (mm).
        snow: Snow depth (mm).
        wind_direction: Average wind direction (degrees).
        wind_speed: Average wind speed (km/h).
        peak_wind_gust: Peak wind gust (km/h).
        pressure: Sea-level air pressure (hPa).
        sunshine_minutes: One-hour sunshine total (minutes).
        condition: Weather condition code.
    """

    datetime: datetime
    temperature: float | None = None
    dew_point: float | None = None
    relative_humidity: int | None = None
    precipitation: float | None = None
    snow: int | None = None
    wind_direction: int | None = None
    wind_speed: float | None = None
    peak_wind_gust: float | None = None
    pressure: float | None = None
    sunshine_minutes: int | None = None
    condition: WeatherCondition | None = None

    def merge_from(self, other: Hourly) -> Hourly:
        """Return a copy with every missing value taken from *other*.

        The timestamp of ``self`` is kept.
        """
        updates = {
            f.name: getattr(other, f.name)
            for f in fields(self)
            if f.name != "datetime" and getattr(self, f.name) is None
        }
        return replace(self, **updates)


@dataclass(frozen=True)
class Daily(_RecordMixin):
    """One day of aggregated observations."""

    date: date
    temp_avg: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    precipitation: float | None = None
    snow_depth: int | None = None
    wind_direction_avg: int | None = None
    wind_speed_avg: float | None = None
    peak_wind_gust: float | None = None
    pressure_avg: float | None = None
    sunshine_total: int | None = None


@dataclass(frozen=True)
class Monthly(_RecordMixin):
    """One month of aggregated observations."""

    year: int
    month: int
    temp_avg: float | None = None
    temp_min_avg: float | None = None
    temp_max_avg: float | None = None
    precipitation_total: float | None = None
    wind_speed_avg: float | None = None
    pressure_avg: float | None = None
    sunshine_total: int | None = None


@dataclass(frozen=True)
class Climate(_RecordMixin):
    """Climate normals of one calendar month over a reference period."""

    start_year: int
    end_year: int
    month: int
    temp_min_avg: float | None = None
    temp_max_avg: float | None = None
    precipitation_avg: float | None = None
    wind_speed_avg: float | None = None
    pressure_avg: float | None = None
    sunshine_avg: int | None = None
