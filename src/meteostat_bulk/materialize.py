"""Per-station Parquet snapshots of the bulk CSV series.

Each (station, frequency) pair is downloaded once, parsed with polars and
stored as ``<cache_dir>/<segment>-<station>.parquet``.  Later requests open
the stored file as a :class:`polars.LazyFrame` without touching the network.
Columns keep polars' positional names (``column_1``, ``column_2``, ...) in
upstream order; renaming happens in :mod:`meteostat_bulk.frames`.
"""

from __future__ import annotations

import contextlib
import io
import logging
import os
import time
from pathlib import Path

import httpx
import polars as pl

from ._threads import run_blocking
from .cache_dir import async_ensure_cache_dir, default_cache_dir, temp_sibling
from .exceptions import (
    CacheDeletionError,
    CacheMetadataReadError,
    CsvReadError,
    CsvReadIoError,
    ParquetScanError,
    ParquetWriteError,
    ParquetWriteIoError,
)
from .fetch import bulk_url, fetch_gz
from .frequency import Frequency

logger = logging.getLogger(__name__)

PARQUET_COMPRESSION = "snappy"


def _parse_csv(station: str, payload: bytes) -> pl.DataFrame:
    try:
        return pl.read_csv(io.BytesIO(payload), has_header=False, infer_schema_length=None)
    except OSError as exc:
        raise CsvReadIoError(station) from exc
    except pl.exceptions.PolarsError as exc:
        raise CsvReadError(station) from exc


def _write_parquet(df: pl.DataFrame, path: Path) -> None:
    """Write *df* next to *path* and rename it into place."""
    try:
        tmp = temp_sibling(path)
    except OSError as exc:
        raise ParquetWriteIoError(path) from exc
    try:
        df.write_parquet(tmp, compression=PARQUET_COMPRESSION)
        os.replace(tmp, path)
    except OSError as exc:
        raise ParquetWriteIoError(path) from exc
    except pl.exceptions.PolarsError as exc:
        raise ParquetWriteError(path) from exc
    finally:
        with contextlib.suppress(OSError):
            tmp.unlink(missing_ok=True)


def _scan_parquet(path: Path) -> pl.LazyFrame:
    try:
        lf = pl.scan_parquet(path)
        # Reads the footer so a corrupt file fails here, not at collect time.
        lf.collect_schema()
    except (OSError, pl.exceptions.PolarsError) as exc:
        raise ParquetScanError(path) from exc
    return lf


def _snapshot_exists(path: Path) -> bool:
    try:
        path.stat()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise CacheMetadataReadError(path) from exc
    return True


class FrameMaterializer:
    """Turn (station, frequency) pairs into lazy frames backed by local Parquet.

    Args:
        cache_dir: Directory holding the snapshots.  Defaults to
            :func:`~meteostat_bulk.cache_dir.default_cache_dir`.
        client: Optional HTTP client reused for downloads.
    """

    __slots__ = ("_cache_dir", "_client")

    def __init__(self, cache_dir: Path | None = None, *, client: httpx.AsyncClient | None = None) -> None:
        self._cache_dir = cache_dir if cache_dir is not None else default_cache_dir()
        self._client = client

    @property
    def cache_dir(self) -> Path:
        """Root directory for snapshot files."""
        return self._cache_dir

    def snapshot_path(self, station: str, frequency: Frequency) -> Path:
        """Path of the Parquet snapshot for *station* at *frequency*."""
        return self._cache_dir / f"{frequency.cache_prefix}{station}.parquet"

    async def materialize(self, station: str, frequency: Frequency) -> pl.LazyFrame:
        """Return a lazy frame over the station's series, downloading it if needed.

        Args:
            station: Meteostat station id.
            frequency: Series to load.

        Raises:
            CacheMetadataReadError: If the snapshot path cannot be checked.
            NetworkError: If the download fails (e.g. HTTP 404 for an unknown id).
            CsvReadIoError: On an I/O failure while parsing the CSV.
            CsvReadError: If the CSV cannot be parsed.
            ParquetWriteIoError: If the snapshot cannot be written.
            ParquetWriteError: If polars cannot encode the snapshot.
            ParquetScanError: If the snapshot cannot be opened.
        """
        path = self.snapshot_path(station, frequency)
        if await run_blocking("check snapshot", _snapshot_exists, path):
            logger.debug("Using cached %s snapshot for station %s", frequency, station)
            return await run_blocking("scan parquet", _scan_parquet, path)

        started = time.perf_counter()
        payload = await fetch_gz(bulk_url(frequency.segment, station), client=self._client)
        df = await run_blocking("parse csv", _parse_csv, station, payload)
        await async_ensure_cache_dir(self._cache_dir)
        await run_blocking("write parquet", _write_parquet, df, path)
        logger.info(
            "Cached %s data for station %s (%d rows) at %s in %.2fs",
            frequency,
            station,
            df.height,
            path,
            time.perf_counter() - started,
        )
        return await run_blocking("scan parquet", _scan_parquet, path)

    def remove_snapshot(self, station: str, frequency: Frequency) -> None:
        """Delete one snapshot.  A missing file is not an error.

        Raises:
            CacheDeletionError: If the file exists but cannot be removed.
        """
        path = self.snapshot_path(station, frequency)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise CacheDeletionError(path) from exc

    def remove_all_snapshots(self) -> int:
        """Delete every per-station snapshot in the cache directory.

        The station catalog snapshot is left alone.

        Returns:
            Number of files removed.

        Raises:
            CacheDeletionError: If a snapshot cannot be removed.
        """
        if not self._cache_dir.is_dir():
            return 0
        removed = 0
        for freq in Frequency:
            for path in self._cache_dir.glob(f"{freq.cache_prefix}*.parquet"):
                try:
                    path.unlink(missing_ok=True)
                except OSError as exc:
                    raise CacheDeletionError(path) from exc
                removed += 1
        logger.debug("Removed %d weather snapshots from %s", removed, self._cache_dir)
        return removed
