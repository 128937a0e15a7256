"""Coverage requirements used to filter stations by their reported inventory."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

from .frequency import Frequency
from .station import CoverageRange, Station, YearRange

RequiredKind = Literal["any", "full_year", "range"]


@dataclass(frozen=True)
class RequiredData:
    """What a station must report coverage for.

    Build instances with the class constructors rather than directly:

    * :meth:`any`: coverage exists at all,
    * :meth:`full_year`: coverage spans a whole calendar year,
    * :meth:`range`: coverage spans an inclusive date range,
    * :meth:`specific_date`: coverage includes one day.

    Checks rely on the start/end metadata Meteostat publishes; gaps inside
    a reported range are not detected.
    """

    kind: RequiredKind = "any"
    year: int | None = None
    start: date | None = None
    end: date | None = None

    @classmethod
    def any(cls) -> RequiredData:
        return cls()

    @classmethod
    def full_year(cls, year: int) -> RequiredData:
        year = int(year)
        return cls(kind="full_year", year=year, start=date(year, 1, 1), end=date(year, 12, 31))

    @classmethod
    def range(cls, start: date, end: date) -> RequiredData:
        """Require coverage of ``start..end`` inclusive.

        Raises:
            ValueError: If *start* is after *end*.
        """
        if start > end:
            msg = f"Range start {start} is after end {end}"
            raise ValueError(msg)
        return cls(kind="range", start=start, end=end)

    @classmethod
    def specific_date(cls, day: date) -> RequiredData:
        return cls.range(day, day)


@dataclass(frozen=True)
class InventoryRequest:
    """A frequency plus the coverage a station must report for it."""

    frequency: Frequency
    required: RequiredData = field(default_factory=RequiredData.any)


def covers(rng: CoverageRange, required: RequiredData) -> bool:
    """Whether a coverage sub-record satisfies *required*.

    An empty sub-record (either end unknown) never satisfies anything.
    Year-based sub-records (monthly, normals) compare at year granularity.
    """
    if rng.start is None or rng.end is None:
        return False
    if required.start is None or required.end is None:
        return True
    if isinstance(rng, YearRange):
        return rng.start <= required.start.year and rng.end >= required.end.year
    return rng.start <= required.start and rng.end >= required.end


def station_meets(
    station: Station,
    frequency: Frequency | None = None,
    required: RequiredData | None = None,
) -> bool:
    """Whether *station* reports the coverage needed for *frequency*.

    Without a frequency every station passes.  A missing requirement means
    :meth:`RequiredData.any`.
    """
    if frequency is None:
        return True
    return covers(station.inventory.for_frequency(frequency), required or RequiredData.any())
