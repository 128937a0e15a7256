"""Load the Meteostat station catalog, from the local snapshot or the archive."""

from __future__ import annotations

import json
import logging
import struct
import time
from pathlib import Path
from typing import Any

import httpx

from ._threads import run_blocking
from .cache_dir import async_ensure_cache_dir, atomic_write_bytes
from .exceptions import (
    CacheDecodeError,
    CacheDeletionError,
    CacheEncodeError,
    CacheReadError,
    CacheWriteError,
    JsonParseError,
    SnapshotFormatError,
)
from .fetch import BASE_URL, fetch_gz
from .snapshot import decode_stations, encode_stations
from .station import Station

logger = logging.getLogger(__name__)

STATIONS_URL = f"{BASE_URL}/stations/lite.json.gz"
SNAPSHOT_FILENAME = "stations_lite.bin"


def snapshot_path(cache_dir: Path) -> Path:
    """Location of the catalog snapshot inside *cache_dir*."""
    return cache_dir / SNAPSHOT_FILENAME


# ---------------------------------------------------------------------------
# Blocking helpers (run on worker threads)
# ---------------------------------------------------------------------------


def _parse_catalog(payload: bytes) -> list[Station]:
    """Parse the upstream JSON array into stations.

    Raises:
        ValueError: If the payload is not a JSON array of station objects.
    """
    data: Any = json.loads(payload)
    if not isinstance(data, list):
        msg = f"expected a JSON array, got {type(data).__name__}"
        raise ValueError(msg)  # noqa: TRY004
    try:
        return [Station.from_dict(item) for item in data]
    except (KeyError, TypeError, AttributeError) as exc:
        msg = f"malformed station record: {exc}"
        raise ValueError(msg) from exc


async def _read_snapshot(path: Path) -> list[Station]:
    try:
        raw = await run_blocking("read station snapshot", path.read_bytes)
    except OSError as exc:
        raise CacheReadError(path) from exc
    try:
        return await run_blocking("decode station snapshot", decode_stations, raw)
    except SnapshotFormatError as exc:
        raise CacheDecodeError(path) from exc


async def _download_catalog(cache_dir: Path, client: httpx.AsyncClient | None) -> list[Station]:
    payload = await fetch_gz(STATIONS_URL, client=client)
    try:
        stations = await run_blocking("parse station catalog", _parse_catalog, payload)
    except ValueError as exc:
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors too.
        raise JsonParseError(STATIONS_URL) from exc

    try:
        encoded = await run_blocking("encode station snapshot", encode_stations, stations)
    except (struct.error, UnicodeEncodeError) as exc:
        raise CacheEncodeError() from exc

    await async_ensure_cache_dir(cache_dir)
    path = snapshot_path(cache_dir)
    try:
        await run_blocking("write station snapshot", atomic_write_bytes, path, encoded)
    except OSError as exc:
        raise CacheWriteError(path) from exc
    logger.info("Wrote station snapshot %s (%d bytes)", path, len(encoded))
    return stations


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def load_stations(cache_dir: Path, *, client: httpx.AsyncClient | None = None) -> list[Station]:
    """Return the full station catalog.

    The binary snapshot in *cache_dir* is used when present.  Otherwise the
    catalog is downloaded from :data:`STATIONS_URL`, parsed, and written to
    the snapshot atomically before being returned.

    Args:
        cache_dir: Cache root holding ``stations_lite.bin``.
        client: Optional HTTP client used for the download.

    Raises:
        CacheReadError: If the snapshot exists but cannot be read.
        CacheDecodeError: If the snapshot exists but is malformed.
        JsonParseError: If the downloaded catalog is not valid JSON.
        CacheEncodeError: If the parsed catalog cannot be serialized.
        CacheWriteError: If the snapshot cannot be written.
        NetworkError: If the download fails.
    """
    started = time.perf_counter()
    path = snapshot_path(cache_dir)
    exists = await run_blocking("check station snapshot", path.is_file)
    if exists:
        stations = await _read_snapshot(path)
        source = str(path)
    else:
        logger.info("No station snapshot at %s, downloading catalog", path)
        stations = await _download_catalog(cache_dir, client)
        source = STATIONS_URL
    logger.info("Loaded %d stations from %s in %.2fs", len(stations), source, time.perf_counter() - started)
    return stations


def clear_station_snapshot(cache_dir: Path) -> None:
    """Delete the catalog snapshot.  A missing file is not an error.

    Raises:
        CacheDeletionError: If the file exists but cannot be removed.
    """
    path = snapshot_path(cache_dir)
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        raise CacheDeletionError(path) from exc
    logger.debug("Removed station snapshot %s", path)


async def refresh_stations(cache_dir: Path, *, client: httpx.AsyncClient | None = None) -> list[Station]:
    """Discard the local snapshot and reload the catalog from the archive."""
    await run_blocking("remove station snapshot", clear_station_snapshot, cache_dir)
    return await load_stations(cache_dir, client=client)
