"""Meteostat weather condition codes (``coco`` column of hourly data)."""

from __future__ import annotations

import math
from enum import IntEnum


class WeatherCondition(IntEnum):
    """Weather condition code as published by Meteostat (1 to 27)."""

    CLEAR = 1
    FAIR = 2
    CLOUDY = 3
    OVERCAST = 4
    FOG = 5
    FREEZING_FOG = 6
    LIGHT_RAIN = 7
    RAIN = 8
    HEAVY_RAIN = 9
    FREEZING_RAIN = 10
    HEAVY_FREEZING_RAIN = 11
    SLEET = 12
    HEAVY_SLEET = 13
    LIGHT_SNOWFALL = 14
    SNOWFALL = 15
    HEAVY_SNOWFALL = 16
    RAIN_SHOWER = 17
    HEAVY_RAIN_SHOWER = 18
    SLEET_SHOWER = 19
    HEAVY_SLEET_SHOWER = 20
    SNOW_SHOWER = 21
    HEAVY_SNOW_SHOWER = 22
    LIGHTNING = 23
    HAIL = 24
    THUNDERSTORM = 25
    HEAVY_THUNDERSTORM = 26
    STORM = 27

    @classmethod
    def from_code(cls, value: object) -> WeatherCondition | None:
        """Map a raw ``coco`` value to a condition.

        Integers, integral floats (polars reads ``8`` as ``8.0`` when a
        column has nulls) and numeric strings are accepted.  Anything else,
        including unknown codes and missing values, gives ``None``.
        """
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                value = float(text)
            except ValueError:
                return None
        if isinstance(value, float):
            if not math.isfinite(value) or not value.is_integer():
                return None
            value = int(value)
        if not isinstance(value, int):
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``"Heavy rain shower"``."""
        return self.name.replace("_", " ").capitalize()
