"""Download and gunzip files from the Meteostat bulk archive."""

from __future__ import annotations

import logging
import time
import zlib

import httpx

from . import __version__
from .exceptions import DownloadIoError, HttpStatusError, NetworkRequestError

logger = logging.getLogger(__name__)

BASE_URL = "https://bulk.meteostat.net/v2"
DEFAULT_TIMEOUT = 120.0
"""Per-request timeout in seconds for clients created by this module."""

USER_AGENT = f"meteostat-bulk/{__version__}"


def bulk_url(segment: str, station_id: str) -> str:
    """Return the bulk archive URL of one station's series.

    Example::

        >>> bulk_url("hourly", "10637")
        'https://bulk.meteostat.net/v2/hourly/10637.csv.gz'
    """
    return f"{BASE_URL}/{segment}/{station_id}.csv.gz"


def new_http_client(*, timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Create an :class:`httpx.AsyncClient` with the package defaults."""
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    )


async def _stream_gunzip(client: httpx.AsyncClient, url: str) -> bytes:
    decoder = zlib.decompressobj(16 + zlib.MAX_WBITS)
    buf = bytearray()
    try:
        async with client.stream("GET", url) as resp:
            if not resp.is_success:
                raise HttpStatusError(url, resp.status_code)
            try:
                async for chunk in resp.aiter_raw():
                    buf += decoder.decompress(chunk)
                buf += decoder.flush()
            except zlib.error as exc:
                raise DownloadIoError(url) from exc
            except httpx.HTTPError as exc:
                raise DownloadIoError(url) from exc
    except httpx.HTTPError as exc:
        raise NetworkRequestError(url) from exc
    if not decoder.eof:
        # Body ended before the gzip trailer.
        raise DownloadIoError(url)
    return bytes(buf)


async def fetch_gz(url: str, *, client: httpx.AsyncClient | None = None) -> bytes:
    """GET *url* and return the gunzipped body.

    The response is streamed through a gzip decoder; nothing is written to
    disk.  No retry is attempted.

    Args:
        url: Absolute URL of a ``.gz`` resource.
        client: Reuse this client instead of creating a short-lived one.

    Returns:
        The decompressed bytes.

    Raises:
        HttpStatusError: If the server answers with a non-2xx status.
        NetworkRequestError: If the request cannot be sent or completed.
        DownloadIoError: If the body stream breaks or is not valid gzip.
    """
    logger.debug("GET %s", url)
    started = time.perf_counter()
    if client is None:
        async with new_http_client() as owned:
            data = await _stream_gunzip(owned, url)
    else:
        data = await _stream_gunzip(client, url)
    logger.info("Downloaded %s (%d bytes decompressed) in %.2fs", url, len(data), time.perf_counter() - started)
    return data
