"""Custom exceptions for meteostat_bulk.

Every failure the library raises derives from :class:`MeteostatError`.  The
concrete classes are grouped under small family bases so callers can catch,
say, every network problem with a single ``except NetworkError``.  Each
exception carries its identifying context (path, URL, station id) as
attributes and renders a one-line summary that includes it.
"""

from __future__ import annotations

from pathlib import Path


class MeteostatError(Exception):
    """Base exception for all meteostat_bulk errors."""

    pass


# ---------------------------------------------------------------------------
# Cache paths
# ---------------------------------------------------------------------------


class CachePathError(MeteostatError):
    """Base class for cache directory resolution and creation failures."""


class CacheDirResolutionError(CachePathError):
    """Raised when no platform cache directory can be determined."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        msg = "Failed to determine the cache directory"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class CacheDirCreationError(CachePathError):
    """Raised when the cache directory cannot be created or is not a directory."""

    def __init__(self, path: Path, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        msg = f"Failed to create cache directory '{path}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


# ---------------------------------------------------------------------------
# Station catalog snapshot
# ---------------------------------------------------------------------------


class CatalogCacheError(MeteostatError):
    """Base class for failures persisting the station catalog snapshot."""


class CacheReadError(CatalogCacheError):
    """Raised when the catalog snapshot file cannot be read."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to read cache file '{path}'")


class CacheWriteError(CatalogCacheError):
    """Raised when the catalog snapshot file cannot be written."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to write cache file '{path}'")


class CacheDecodeError(CatalogCacheError):
    """Raised when the catalog snapshot exists but cannot be decoded."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to decode cache data from '{path}'")


class CacheEncodeError(CatalogCacheError):
    """Raised when the station list cannot be serialized to the snapshot format."""

    def __init__(self) -> None:
        super().__init__("Failed to encode cache data")


class SnapshotFormatError(MeteostatError):
    """Raised by the binary codec on malformed snapshot bytes."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        self.offset = offset
        msg = message
        if offset is not None:
            msg += f" (at byte {offset})"
        super().__init__(msg)


# ---------------------------------------------------------------------------
# Per-station frame snapshots
# ---------------------------------------------------------------------------


class FrameCacheError(MeteostatError):
    """Base class for failures persisting per-station Parquet snapshots."""


class CacheMetadataReadError(FrameCacheError):
    """Raised when probing a snapshot path fails for a reason other than absence."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to read metadata for cache file '{path}'")


class ParquetWriteIoError(FrameCacheError):
    """Raised on an OS-level failure while writing a Parquet snapshot."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"I/O error writing parquet cache file '{path}'")


class ParquetWriteError(FrameCacheError):
    """Raised when polars fails to encode a Parquet snapshot."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Encoding error writing parquet cache file '{path}'")


class ParquetScanError(FrameCacheError):
    """Raised when a Parquet snapshot cannot be opened as a lazy frame."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to scan parquet cache file '{path}'")


class CacheDeletionError(FrameCacheError):
    """Raised when a cached file cannot be removed."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to delete cache '{path}'")


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------


class NetworkError(MeteostatError):
    """Base class for failures talking to the bulk archive."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(message)


class NetworkRequestError(NetworkError):
    """Raised when the HTTP request itself fails (DNS, connect, timeout...)."""

    def __init__(self, url: str) -> None:
        super().__init__(url, f"Network request failed for {url}")


class HttpStatusError(NetworkError):
    """Raised when the archive answers with a non-2xx status."""

    def __init__(self, url: str, status: int) -> None:
        self.status = status
        super().__init__(url, f"HTTP request failed for {url} with status {status}")


class DownloadIoError(NetworkError):
    """Raised when the response stream breaks or does not decompress."""

    def __init__(self, url: str) -> None:
        super().__init__(url, f"Data download or decompression failed for {url}")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class DataParseError(MeteostatError):
    """Base class for failures parsing upstream payloads."""


class JsonParseError(DataParseError):
    """Raised when the station catalog payload is not valid JSON."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Failed to parse JSON data from {url}")


class CsvReadIoError(DataParseError):
    """Raised on an I/O failure while reading CSV data for a station."""

    def __init__(self, station: str) -> None:
        self.station = station
        super().__init__(f"I/O error processing CSV data for station '{station}'")


class CsvReadError(DataParseError):
    """Raised when polars cannot parse the CSV data for a station."""

    def __init__(self, station: str) -> None:
        self.station = station
        super().__init__(f"Parsing error processing CSV data for station '{station}'")


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------


class TaskJoinError(MeteostatError):
    """Raised when a background worker thread fails unexpectedly."""

    def __init__(self, task: str) -> None:
        self.task = task
        super().__init__(f"Background task '{task}' failed to complete")


# ---------------------------------------------------------------------------
# Station selection
# ---------------------------------------------------------------------------


class StationSelectionError(MeteostatError):
    """Base class for location-based station selection failures."""


class NoStationWithinRadiusError(StationSelectionError):
    """Raised when no station matching the criteria lies within the search radius."""

    def __init__(self, radius: float, lat: float, lon: float) -> None:
        self.radius = radius
        self.lat = lat
        self.lon = lon
        super().__init__(f"No weather station found within {radius} km of ({lat}, {lon})")


class NoDataFoundForNearbyStationsError(StationSelectionError):
    """Raised when every candidate station near a location failed to yield data.

    Attributes:
        radius: Search radius in kilometres.
        lat: Query latitude.
        lon: Query longitude.
        stations_tried: Number of candidate stations attempted.
        last_error: The error raised by the last candidate, if any.
    """

    def __init__(
        self,
        radius: float,
        lat: float,
        lon: float,
        stations_tried: int,
        last_error: BaseException | None = None,
    ) -> None:
        self.radius = radius
        self.lat = lat
        self.lon = lon
        self.stations_tried = stations_tried
        self.last_error = last_error
        msg = (
            f"No data found for {stations_tried} station(s) within {radius} km of ({lat}, {lon})"
        )
        if last_error is not None:
            msg += f"; last error: {last_error}"
        super().__init__(msg)


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


class DateParsingError(MeteostatError):
    """Raised when a date, datetime, or period input cannot be resolved."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Could not resolve {value!r} to a date range")


class ExpectedSingleRowError(MeteostatError):
    """Raised when a single-row collection finds zero or several rows."""

    def __init__(self, actual: int) -> None:
        self.actual = actual
        super().__init__(f"Expected exactly one row, found {actual}")
