"""Per-frequency URL segments, cache prefixes, and column layouts."""

from __future__ import annotations

from enum import Enum

_COLUMNS: dict[str, tuple[str, ...]] = {
    "hourly": (
        "date",
        "hour",
        "temp",
        "dwpt",
        "rhum",
        "prcp",
        "snow",
        "wdir",
        "wspd",
        "wpgt",
        "pres",
        "tsun",
        "coco",
    ),
    "daily": (
        "date",
        "tavg",
        "tmin",
        "tmax",
        "prcp",
        "snow",
        "wdir",
        "wspd",
        "wpgt",
        "pres",
        "tsun",
    ),
    "monthly": ("year", "month", "tavg", "tmin", "tmax", "prcp", "wspd", "pres", "tsun"),
    "normals": ("start_year", "end_year", "month", "tmin", "tmax", "prcp", "wspd", "pres", "tsun"),
}


class Frequency(Enum):
    """Temporal resolution of a Meteostat bulk series.

    The value is the URL path segment used by the bulk archive.
    """

    HOURLY = "hourly"
    DAILY = "daily"
    MONTHLY = "monthly"
    CLIMATE = "normals"

    @property
    def segment(self) -> str:
        """URL path segment, e.g. ``"normals"`` for :attr:`CLIMATE`."""
        return self.value

    @property
    def cache_prefix(self) -> str:
        """Filename prefix of the per-station Parquet snapshot."""
        return f"{self.value}-"

    @property
    def columns(self) -> tuple[str, ...]:
        """Upstream CSV column names, left to right."""
        return _COLUMNS[self.value]

    def __str__(self) -> str:
        return self.value
