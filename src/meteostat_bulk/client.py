"""High-level client tying the catalog, spatial index and frame cache together."""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

import httpx
import polars as pl

from ._threads import run_blocking
from .cache_dir import async_ensure_cache_dir, default_cache_dir
from .catalog import clear_station_snapshot, refresh_stations
from .exceptions import (
    MeteostatError,
    NoDataFoundForNearbyStationsError,
    NoStationWithinRadiusError,
)
from .fetch import new_http_client
from .frame_cache import FrameCache
from .frequency import Frequency
from .index import StationIndex
from .inventory import InventoryRequest, RequiredData
from .materialize import FrameMaterializer
from .requests import ClimateRequest, DailyRequest, HourlyRequest, MonthlyRequest
from .station import SpatialResult, Station

logger = logging.getLogger(__name__)

DEFAULT_MAX_KM = 50.0
DEFAULT_FIND_LIMIT = 5
DEFAULT_LOCATION_LIMIT = 1


class Meteostat:
    """Async client for Meteostat's bulk archive.

    Build instances with :meth:`create`, which resolves the cache directory
    and loads the station catalog.  Frames are cached per process, so a
    second request for the same station and frequency does no I/O.

    Example::

        async with await Meteostat.create() as client:
            raw = await client.from_location(52.52, 13.40, Frequency.DAILY)
            print(raw.collect().head())

    Args:
        cache_dir: Cache root shared by the catalog and frame snapshots.
        index: Station index to search.
        client: HTTP client for downloads.  When omitted, the client owns a
            private one and closes it in :meth:`aclose`.
    """

    __slots__ = ("_cache_dir", "_frames", "_http", "_index", "_owns_http")

    def __init__(
        self,
        cache_dir: Path,
        index: StationIndex,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._cache_dir = cache_dir
        self._index = index
        self._owns_http = client is None
        self._http = client if client is not None else new_http_client()
        self._frames = FrameCache(FrameMaterializer(cache_dir, client=self._http))

    # --- Construction -------------------------------------------------------

    @classmethod
    async def create(
        cls,
        cache_dir: Path | str | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> Meteostat:
        """Prepare the cache directory, load the catalog and return a client.

        Args:
            cache_dir: Override the cache root.  Falls back to
                ``$METEOSTAT_CACHE_DIR`` and then the platform cache directory.
            client: Optional HTTP client reused for every download.

        Raises:
            CachePathError: If the cache root cannot be resolved or created.
            CatalogCacheError: If the catalog snapshot cannot be read or written.
            NetworkError: If the catalog must be downloaded and that fails.
        """
        root = Path(cache_dir) if cache_dir is not None else default_cache_dir()
        await async_ensure_cache_dir(root)
        index = await StationIndex.load(root, client=client)
        return cls(root, index, client=client)

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> Meteostat:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # --- Properties ---------------------------------------------------------

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    @property
    def index(self) -> StationIndex:
        return self._index

    @property
    def frame_cache(self) -> FrameCache:
        return self._frames

    # --- Station search -----------------------------------------------------

    async def find_stations_with_distance(
        self,
        latitude: float,
        longitude: float,
        *,
        max_km: float | None = None,
        k: int | None = None,
        inventory: InventoryRequest | None = None,
    ) -> list[SpatialResult]:
        """Nearest stations with their great-circle distance, closest first.

        Args:
            latitude: Decimal degrees, north positive.
            longitude: Decimal degrees, east positive.
            max_km: Search radius, default :data:`DEFAULT_MAX_KM`.
            k: Maximum number of stations, default :data:`DEFAULT_FIND_LIMIT`.
            inventory: Only keep stations reporting this coverage.
        """
        return self._index.query(
            latitude,
            longitude,
            DEFAULT_FIND_LIMIT if k is None else k,
            DEFAULT_MAX_KM if max_km is None else max_km,
            inventory.frequency if inventory else None,
            inventory.required if inventory else None,
        )

    async def find_stations(
        self,
        latitude: float,
        longitude: float,
        *,
        max_km: float | None = None,
        k: int | None = None,
        inventory: InventoryRequest | None = None,
    ) -> list[Station]:
        """Like :meth:`find_stations_with_distance`, without the distances."""
        results = await self.find_stations_with_distance(latitude, longitude, max_km=max_km, k=k, inventory=inventory)
        return [r.station for r in results]

    # --- Data access --------------------------------------------------------

    async def from_station(self, station_id: str, frequency: Frequency) -> pl.LazyFrame:
        """Lazy frame over one station's series, columns named ``column_N``.

        The station id is not checked against the catalog; an unknown id
        fails when the archive answers with an HTTP error.
        """
        return await self._frames.get(station_id, frequency)

    async def from_location(
        self,
        latitude: float,
        longitude: float,
        frequency: Frequency,
        *,
        max_km: float | None = None,
        k: int | None = None,
        required: RequiredData | None = None,
    ) -> pl.LazyFrame:
        """Lazy frame for the nearest station that has data for *frequency*.

        Up to *k* candidates (default :data:`DEFAULT_LOCATION_LIMIT`) within
        *max_km* (default :data:`DEFAULT_MAX_KM`) are tried in order of
        distance; the first that loads wins.

        Raises:
            NoStationWithinRadiusError: If no station qualifies.
            NoDataFoundForNearbyStationsError: If every candidate failed.
        """
        radius = DEFAULT_MAX_KM if max_km is None else max_km
        limit = DEFAULT_LOCATION_LIMIT if k is None else k
        candidates = self._index.query(latitude, longitude, limit, radius, frequency, required)
        if not candidates:
            raise NoStationWithinRadiusError(radius, latitude, longitude)

        last_error: MeteostatError | None = None
        for candidate in candidates:
            station_id = candidate.station.id
            try:
                return await self._frames.get(station_id, frequency)
            except MeteostatError as exc:
                logger.warning(
                    "Station %s (%.1f km) failed for %s data: %s",
                    station_id,
                    candidate.distance_km,
                    frequency,
                    exc,
                )
                last_error = exc

        raise NoDataFoundForNearbyStationsError(
            radius, latitude, longitude, len(candidates), last_error
        ) from last_error

    # --- Typed requests -----------------------------------------------------

    def hourly(self) -> HourlyRequest:
        return HourlyRequest(self)

    def daily(self) -> DailyRequest:
        return DailyRequest(self)

    def monthly(self) -> MonthlyRequest:
        return MonthlyRequest(self)

    def climate(self) -> ClimateRequest:
        return ClimateRequest(self)

    # --- Cache management ---------------------------------------------------

    async def clear_station_cache(self) -> None:
        """Delete the catalog snapshot.  The loaded index stays in memory."""
        await run_blocking("remove station snapshot", clear_station_snapshot, self._cache_dir)

    async def rebuild_station_cache(self) -> None:
        """Re-download the catalog, rewrite its snapshot and swap in a new index."""
        stations = await refresh_stations(self._cache_dir, client=self._http)
        self._index = StationIndex(stations)

    async def clear_weather_cache(self, station_id: str, frequency: Frequency) -> None:
        """Forget one cached frame and delete its Parquet snapshot."""
        await self._frames.invalidate(station_id, frequency)
        await run_blocking(
            "remove weather snapshot", self._frames.materializer.remove_snapshot, station_id, frequency
        )

    async def clear_all_weather_cache(self) -> None:
        """Forget every cached frame and delete every Parquet snapshot."""
        await self._frames.invalidate_all()
        await run_blocking("remove weather snapshots", self._frames.materializer.remove_all_snapshots)

    async def clear_cache(self) -> None:
        """Delete the catalog snapshot and every weather snapshot."""
        await self.clear_station_cache()
        await self.clear_all_weather_cache()
