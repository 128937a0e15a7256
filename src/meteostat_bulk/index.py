"""Nearest-station search over the Meteostat station catalog."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import httpx

from .cache_dir import default_cache_dir
from .catalog import load_stations
from .frequency import Frequency
from .inventory import RequiredData, station_meets
from .spatial import bounding_box, haversine_km, planar_sq_distance
from .station import SpatialResult, Station


class StationIndex:
    """Spatially searchable index of Meteostat stations.

    Use :meth:`load` to build the index from the cached catalog snapshot
    (downloading it on first use), or :meth:`from_stations` for an explicit
    list.

    Example::

        index = await StationIndex.load()
        for r in index.query(52.52, 13.40, k=3, max_km=50):
            print(r.station.id, round(r.distance_km, 1))
    """

    __slots__ = ("_by_id", "_stations")

    _stations: list[Station]
    _by_id: dict[str, Station]

    def __init__(self, stations: Iterable[Station]) -> None:
        self._stations = list(stations)
        self._by_id = {}
        for s in self._stations:
            self._by_id.setdefault(s.id, s)

    # --- Construction -------------------------------------------------------

    @classmethod
    async def load(
        cls,
        cache_dir: Path | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> StationIndex:
        """Load the catalog (snapshot first, archive otherwise) and index it.

        Args:
            cache_dir: Override the default cache directory.
            client: Optional HTTP client used if the catalog must be downloaded.
        """
        cache = cache_dir or default_cache_dir()
        return cls(await load_stations(cache, client=client))

    @classmethod
    def from_stations(cls, stations: Iterable[Station]) -> StationIndex:
        """Create an index from an explicit list of stations (useful for tests)."""
        return cls(stations)

    # --- Properties ---------------------------------------------------------

    @property
    def stations(self) -> list[Station]:
        """All stations in the index."""
        return list(self._stations)

    def __len__(self) -> int:
        return len(self._stations)

    @property
    def countries(self) -> list[str]:
        """Sorted list of unique country codes in the index."""
        return sorted({s.country for s in self._stations})

    # --- Exact lookups ------------------------------------------------------

    def get(self, station_id: str) -> Station | None:
        """Return the station with *station_id*, or ``None``."""
        return self._by_id.get(station_id)

    # --- Spatial search -----------------------------------------------------

    def query(
        self,
        latitude: float,
        longitude: float,
        k: int,
        max_km: float,
        frequency: Frequency | None = None,
        required: RequiredData | None = None,
    ) -> list[SpatialResult]:
        """Find up to *k* stations within *max_km* of a coordinate.

        Candidates inside a degree bounding box are visited nearest-first in
        raw (lat, lon) space, their great-circle distance is computed, and
        those farther than *max_km* or lacking the requested coverage are
        dropped.  Survivors are stably sorted by distance.

        Args:
            latitude: Decimal degrees, north positive.
            longitude: Decimal degrees, east positive.
            k: Maximum results to return.
            max_km: Exclude stations farther than this.
            frequency: If given, the station must report coverage for it.
            required: Coverage the station must report for *frequency*.

        Returns:
            Results ordered by ascending ``distance_km``.
        """
        if k <= 0:
            return []

        box = bounding_box(latitude, longitude, max_km)
        if box is not None:
            lat_min, lat_max, lon_min, lon_max = box
            candidates = [
                s
                for s in self._stations
                if lat_min <= s.location.latitude <= lat_max and lon_min <= s.location.longitude <= lon_max
            ]
        else:
            candidates = list(self._stations)

        candidates.sort(key=lambda s: planar_sq_distance(latitude, longitude, s.location.latitude, s.location.longitude))

        results: list[SpatialResult] = []
        for station in candidates:
            dist = haversine_km(latitude, longitude, station.location.latitude, station.location.longitude)
            if dist > max_km:
                continue
            if not station_meets(station, frequency, required):
                continue
            results.append(SpatialResult(station=station, distance_km=dist))

        results.sort(key=lambda r: r.distance_km)
        return results[:k]
