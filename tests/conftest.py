"""Shared fixtures and helpers for meteostat_bulk tests."""

from __future__ import annotations

import gzip
import json
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

import httpx
import pytest

from meteostat_bulk.station import DateRange, Identifiers, Inventory, Location, Station, YearRange

# ---------------------------------------------------------------------------
# Sample stations
# ---------------------------------------------------------------------------


def make_station(
    station_id: str,
    latitude: float,
    longitude: float,
    *,
    country: str = "DE",
    name: str | None = None,
    daily: tuple[date, date] | None = (date(1990, 1, 1), date(2023, 12, 31)),
    hourly: tuple[date, date] | None = (date(2000, 1, 1), date(2023, 12, 31)),
    monthly: tuple[int, int] | None = (1990, 2023),
    normals: tuple[int, int] | None = (1991, 2020),
) -> Station:
    """Build a station with the given coverage; ``None`` means no coverage."""
    return Station(
        id=station_id,
        country=country,
        location=Location(latitude=latitude, longitude=longitude, elevation=100),
        region="BE",
        timezone="Europe/Berlin",
        name={"en": name or f"Station {station_id}"},
        identifiers=Identifiers(national=None, wmo=station_id, icao=None),
        inventory=Inventory(
            daily=DateRange(*daily) if daily else DateRange(),
            hourly=DateRange(*hourly) if hourly else DateRange(),
            monthly=YearRange(*monthly) if monthly else YearRange(),
            normals=YearRange(*normals) if normals else YearRange(),
        ),
    )


@pytest.fixture
def berlin_stations() -> list[Station]:
    """Three stations around Berlin plus one far away in Munich."""
    return [
        make_station("10384", 52.4667, 13.4, name="Berlin / Tempelhof"),
        make_station("10389", 52.5644, 13.3088, name="Berlin / Tegel", hourly=None),
        make_station("10379", 52.3833, 13.0667, name="Potsdam", daily=(date(1990, 1, 1), date(2010, 12, 31))),
        make_station("10865", 48.1833, 11.55, name="Munich"),
    ]


CATALOG_ENTRY: dict[str, Any] = {
    "id": "10637",
    "name": {"en": "Frankfurt Airport", "de": "Frankfurt/Main"},
    "country": "DE",
    "region": "HE",
    "identifiers": {"national": "01420", "wmo": "10637", "icao": "EDDF"},
    "location": {"latitude": 50.05, "longitude": 8.6, "elevation": 111},
    "timezone": "Europe/Berlin",
    "inventory": {
        "model": {"start": None, "end": None},
        "hourly": {"start": "1926-01-01", "end": "2023-12-31"},
        "daily": {"start": "1934-01-01", "end": "2023-12-31"},
        "monthly": {"start": 1934, "end": 2023},
        "normals": {"start": 1961, "end": 2020},
    },
}


def catalog_payload(*entries: Mapping[str, Any]) -> bytes:
    """Gzipped JSON catalog as served by the bulk archive."""
    return gzip.compress(json.dumps(list(entries) or [CATALOG_ENTRY]).encode())


# ---------------------------------------------------------------------------
# Sample CSV payloads (no header, upstream column order)
# ---------------------------------------------------------------------------

HOURLY_CSV = (
    "2023-06-01,13,20.1,9.8,52,0.0,,220,10.8,22.3,1015.8,60,2\n"
    "2023-06-01,14,21.3,10.2,50,0.0,,230,11.2,,1015.2,60,3\n"
    "2023-06-01,15,22.0,10.0,46,0.4,,240,12.0,25.9,1014.9,,8\n"
    "2023-06-02,0,14.2,9.1,71,,,200,5.4,,1016.0,0,\n"
)

DAILY_CSV = (
    "2022-12-31,1.2,-0.5,3.4,0.0,,250,9.0,30.0,1020.1,120\n"
    "2023-01-01,2.3,0.1,4.8,1.2,,260,11.5,35.2,1018.4,60\n"
    "2023-01-02,3.1,1.0,5.0,,,270,12.0,,1017.0,\n"
    "2023-02-01,-1.0,-4.0,2.0,0.0,10,90,7.0,,1025.0,300\n"
)

MONTHLY_CSV = (
    "2022,11,6.1,2.9,9.4,48.0,12.1,1016.2,3600\n"
    "2022,12,2.2,-0.4,4.6,61.3,13.0,1014.8,2400\n"
    "2023,1,3.4,0.8,6.1,55.2,14.2,1013.9,2700\n"
    "2023,2,4.0,0.5,7.9,30.1,12.8,1019.5,\n"
)

CLIMATE_CSV = (
    "1991,2020,1,-0.9,4.1,42.0,13.0,1017.1,3300\n"
    "1991,2020,7,14.2,25.0,65.3,10.1,1015.0,13500\n"
    "1961,1990,1,-2.1,2.9,40.2,,1016.8,\n"
)


def gz(text: str | bytes) -> bytes:
    return gzip.compress(text.encode() if isinstance(text, str) else text)


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


class ArchiveStub:
    """Route bulk archive paths to canned gzipped bodies and count requests.

    Unknown paths answer ``404``.
    """

    def __init__(self, routes: Mapping[str, bytes | int] | None = None) -> None:
        self.routes: dict[str, bytes | int] = dict(routes or {})
        self.calls: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append(path)
        body = self.routes.get(path, 404)
        if isinstance(body, int):
            return httpx.Response(body)
        return httpx.Response(200, content=body)

    def count(self, path: str) -> int:
        return self.calls.count(path)

    def client(self) -> httpx.AsyncClient:
        return mock_client(self.handler)


class _UnreadByteStream(httpx.AsyncByteStream):
    """Yield a canned body as a stream that has not been read yet."""

    def __init__(self, body: bytes) -> None:
        self._body = body

    async def __aiter__(self):
        if self._body:
            yield self._body


def _streaming(handler: Callable[[httpx.Request], httpx.Response]) -> Callable[[httpx.Request], httpx.Response]:
    # httpx reads a bytes ``content=`` body eagerly, which makes ``aiter_raw``
    # raise ``StreamConsumed``; re-wrap it as an unread stream like a real transport.
    def wrapped(request: httpx.Request) -> httpx.Response:
        response = handler(request)
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            stream=_UnreadByteStream(response.content),
            request=request,
        )

    return wrapped


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(_streaming(handler)))
