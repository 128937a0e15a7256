"""Weather station data model and search result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from .frequency import Frequency


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _parse_year(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class DateRange:
    """Reported availability of a day-resolution series.

    Attributes:
        start: First day with data, if known.
        end: Last day with data, if known.
    """

    start: date | None = None
    end: date | None = None

    @property
    def is_empty(self) -> bool:
        """``True`` unless both ends of the range are known."""
        return self.start is None or self.end is None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> DateRange:
        if not data:
            return cls()
        return cls(start=_parse_date(data.get("start")), end=_parse_date(data.get("end")))

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }


@dataclass(frozen=True)
class YearRange:
    """Reported availability of a year-resolution series.

    Attributes:
        start: First year with data, if known.
        end: Last year with data, if known.
    """

    start: int | None = None
    end: int | None = None

    @property
    def is_empty(self) -> bool:
        """``True`` unless both ends of the range are known."""
        return self.start is None or self.end is None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> YearRange:
        if not data:
            return cls()
        return cls(start=_parse_year(data.get("start")), end=_parse_year(data.get("end")))

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "end": self.end}


CoverageRange = Union[DateRange, YearRange]


@dataclass(frozen=True)
class Inventory:
    """Data availability of a station, one sub-record per source series.

    ``model`` is carried through but never consulted for station selection.
    """

    daily: DateRange = field(default_factory=DateRange)
    hourly: DateRange = field(default_factory=DateRange)
    model: DateRange = field(default_factory=DateRange)
    monthly: YearRange = field(default_factory=YearRange)
    normals: YearRange = field(default_factory=YearRange)

    def for_frequency(self, frequency: Frequency) -> CoverageRange:
        """Return the coverage sub-record that governs *frequency*."""
        from .frequency import Frequency

        if frequency is Frequency.HOURLY:
            return self.hourly
        if frequency is Frequency.DAILY:
            return self.daily
        if frequency is Frequency.MONTHLY:
            return self.monthly
        return self.normals

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Inventory:
        data = data or {}
        return cls(
            daily=DateRange.from_dict(data.get("daily")),
            hourly=DateRange.from_dict(data.get("hourly")),
            model=DateRange.from_dict(data.get("model")),
            monthly=YearRange.from_dict(data.get("monthly")),
            normals=YearRange.from_dict(data.get("normals")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "daily": self.daily.to_dict(),
            "hourly": self.hourly.to_dict(),
            "model": self.model.to_dict(),
            "monthly": self.monthly.to_dict(),
            "normals": self.normals.to_dict(),
        }


@dataclass(frozen=True)
class Identifiers:
    """Alternative station codes.

    Attributes:
        national: National weather service identifier.
        wmo: World Meteorological Organization number.
        icao: ICAO airport code.
    """

    national: str | None = None
    wmo: str | None = None
    icao: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Identifiers:
        data = data or {}
        return cls(
            national=_opt_str(data.get("national")),
            wmo=_opt_str(data.get("wmo")),
            icao=_opt_str(data.get("icao")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"national": self.national, "wmo": self.wmo, "icao": self.icao}


@dataclass(frozen=True)
class Location:
    """Geographic position of a station.

    Attributes:
        latitude: Decimal degrees, north positive.
        longitude: Decimal degrees, east positive.
        elevation: Metres above sea level, if known.
    """

    latitude: float
    longitude: float
    elevation: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Location:
        elevation = data.get("elevation")
        return cls(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            elevation=int(elevation) if elevation is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"latitude": self.latitude, "longitude": self.longitude, "elevation": self.elevation}


@dataclass(frozen=True)
class Station:
    """Metadata for a single Meteostat weather station.

    Instances are built from the elements of the bulk ``stations/lite.json``
    catalog and are read-only once loaded.

    Attributes:
        id: Meteostat station identifier (e.g. ``"10637"``).
        country: ISO 3166 country code (e.g. ``"DE"``).
        region: Region or state code, if any.
        timezone: IANA timezone name (e.g. ``"Europe/Berlin"``), if any.
        name: Station name keyed by language code.
        identifiers: National, WMO and ICAO codes.
        location: Latitude, longitude and elevation.
        inventory: Reported data coverage per series.
    """

    id: str
    country: str
    location: Location
    region: str | None = None
    timezone: str | None = None
    name: dict[str, str] = field(default_factory=dict)
    identifiers: Identifiers = field(default_factory=Identifiers)
    inventory: Inventory = field(default_factory=Inventory)

    @property
    def latitude(self) -> float:
        return self.location.latitude

    @property
    def longitude(self) -> float:
        return self.location.longitude

    @property
    def display_name(self) -> str:
        """English name when available, else any name, else the station id."""
        if "en" in self.name:
            return self.name["en"]
        for value in self.name.values():
            return value
        return self.id

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Station:
        """Build a station from one element of the upstream JSON catalog.

        Optional keys (``region``, ``timezone``, ``elevation``, identifier
        codes and inventory sub-records) may be missing or ``null``.
        """
        return cls(
            id=str(data["id"]),
            country=str(data.get("country") or ""),
            region=_opt_str(data.get("region")),
            timezone=_opt_str(data.get("timezone")),
            name={str(k): str(v) for k, v in (data.get("name") or {}).items()},
            identifiers=Identifiers.from_dict(data.get("identifiers")),
            location=Location.from_dict(data["location"]),
            inventory=Inventory.from_dict(data.get("inventory")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the upstream JSON shape (ISO dates)."""
        return {
            "id": self.id,
            "country": self.country,
            "region": self.region,
            "timezone": self.timezone,
            "name": dict(self.name),
            "identifiers": self.identifiers.to_dict(),
            "location": self.location.to_dict(),
            "inventory": self.inventory.to_dict(),
        }


@dataclass(frozen=True)
class SpatialResult:
    """A spatial proximity result with great-circle distance."""

    station: Station
    distance_km: float
    """Great-circle distance in kilometres."""
