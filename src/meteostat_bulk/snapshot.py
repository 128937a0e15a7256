"""Binary codec for the station catalog snapshot (``stations_lite.bin``).

The layout is fixed-width little-endian with length prefixes, in the shape
of bincode's fixint encoding:

* ``u64`` station count, then for each station in field order:
  ``id``, ``country`` (str), ``region``, ``timezone`` (option str),
  ``name`` (``u64`` entry count then ``(str, str)`` pairs),
  identifiers ``national``, ``wmo``, ``icao`` (option str),
  location ``latitude``, ``longitude`` (f64) and ``elevation`` (option i32),
  inventory ``daily``, ``hourly``, ``model`` (date ranges) then
  ``monthly``, ``normals`` (year ranges).
* ``str`` is a ``u64`` byte length followed by UTF-8 bytes.
* ``option`` is a ``u8`` tag (0 absent, 1 present) followed by the value.
* A date is ``i32`` year, ``u32`` month, ``u32`` day; a year is ``i32``.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable
from datetime import date
from typing import Callable, TypeVar

from .exceptions import SnapshotFormatError
from .station import DateRange, Identifiers, Inventory, Location, Station, YearRange

T = TypeVar("T")

_U8 = struct.Struct("<B")
_U64 = struct.Struct("<Q")
_I32 = struct.Struct("<i")
_F64 = struct.Struct("<d")
_DATE = struct.Struct("<iII")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


class _Writer:
    __slots__ = ("_buf",)

    def __init__(self) -> None:
        self._buf = bytearray()

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def u8(self, value: int) -> None:
        self._buf += _U8.pack(value)

    def u64(self, value: int) -> None:
        self._buf += _U64.pack(value)

    def i32(self, value: int) -> None:
        self._buf += _I32.pack(value)

    def f64(self, value: float) -> None:
        self._buf += _F64.pack(value)

    def str(self, value: str) -> None:
        raw = value.encode("utf-8")
        self.u64(len(raw))
        self._buf += raw

    def date(self, value: date) -> None:
        self._buf += _DATE.pack(value.year, value.month, value.day)

    def option(self, value: T | None, write: Callable[[T], None]) -> None:
        if value is None:
            self.u8(0)
        else:
            self.u8(1)
            write(value)


def _write_date_range(w: _Writer, rng: DateRange) -> None:
    w.option(rng.start, w.date)
    w.option(rng.end, w.date)


def _write_year_range(w: _Writer, rng: YearRange) -> None:
    w.option(rng.start, w.i32)
    w.option(rng.end, w.i32)


def _write_station(w: _Writer, station: Station) -> None:
    w.str(station.id)
    w.str(station.country)
    w.option(station.region, w.str)
    w.option(station.timezone, w.str)
    w.u64(len(station.name))
    for lang, name in station.name.items():
        w.str(lang)
        w.str(name)
    ids = station.identifiers
    w.option(ids.national, w.str)
    w.option(ids.wmo, w.str)
    w.option(ids.icao, w.str)
    loc = station.location
    w.f64(loc.latitude)
    w.f64(loc.longitude)
    w.option(loc.elevation, w.i32)
    inv = station.inventory
    _write_date_range(w, inv.daily)
    _write_date_range(w, inv.hourly)
    _write_date_range(w, inv.model)
    _write_year_range(w, inv.monthly)
    _write_year_range(w, inv.normals)


def encode_stations(stations: Iterable[Station]) -> bytes:
    """Serialize *stations* to snapshot bytes.

    Raises:
        struct.error: If a numeric field does not fit its fixed width.
    """
    items = list(stations)
    w = _Writer()
    w.u64(len(items))
    for station in items:
        _write_station(w, station)
    return w.getvalue()


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class _Reader:
    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, n: int) -> memoryview:
        if n > self.remaining:
            msg = f"Unexpected end of snapshot: need {n} bytes, have {self.remaining}"
            raise SnapshotFormatError(msg, offset=self._pos)
        chunk = self._data[self._pos : self._pos + n]
        self._pos += n
        return chunk

    def _unpack(self, fmt: struct.Struct) -> tuple:
        return fmt.unpack(self._take(fmt.size))

    def u8(self) -> int:
        return self._unpack(_U8)[0]

    def u64(self) -> int:
        return self._unpack(_U64)[0]

    def i32(self) -> int:
        return self._unpack(_I32)[0]

    def f64(self) -> float:
        return self._unpack(_F64)[0]

    def str(self) -> str:
        length = self.u64()
        start = self._pos
        raw = self._take(length)
        try:
            return bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SnapshotFormatError("Invalid UTF-8 in string field", offset=start) from exc

    def date(self) -> date:
        start = self._pos
        year, month, day = self._unpack(_DATE)
        try:
            return date(year, month, day)
        except ValueError as exc:
            msg = f"Invalid date {year}-{month}-{day}"
            raise SnapshotFormatError(msg, offset=start) from exc

    def option(self, read: Callable[[], T]) -> T | None:
        start = self._pos
        tag = self.u8()
        if tag == 0:
            return None
        if tag == 1:
            return read()
        raise SnapshotFormatError(f"Invalid option tag {tag}", offset=start)


def _read_date_range(r: _Reader) -> DateRange:
    return DateRange(start=r.option(r.date), end=r.option(r.date))


def _read_year_range(r: _Reader) -> YearRange:
    return YearRange(start=r.option(r.i32), end=r.option(r.i32))


def _read_station(r: _Reader) -> Station:
    station_id = r.str()
    country = r.str()
    region = r.option(r.str)
    tz = r.option(r.str)
    name: dict[str, str] = {}
    for _ in range(r.u64()):
        lang = r.str()
        name[lang] = r.str()
    identifiers = Identifiers(national=r.option(r.str), wmo=r.option(r.str), icao=r.option(r.str))
    location = Location(latitude=r.f64(), longitude=r.f64(), elevation=r.option(r.i32))
    inventory = Inventory(
        daily=_read_date_range(r),
        hourly=_read_date_range(r),
        model=_read_date_range(r),
        monthly=_read_year_range(r),
        normals=_read_year_range(r),
    )
    return Station(
        id=station_id,
        country=country,
        region=region,
        timezone=tz,
        name=name,
        identifiers=identifiers,
        location=location,
        inventory=inventory,
    )


def decode_stations(data: bytes) -> list[Station]:
    """Deserialize snapshot bytes produced by :func:`encode_stations`.

    Raises:
        SnapshotFormatError: On truncated input, an invalid option tag,
            invalid UTF-8, an impossible date, or trailing bytes.
    """
    r = _Reader(data)
    count = r.u64()
    # Smallest possible station record is well over 8 bytes.
    if count > r.remaining // 8:
        raise SnapshotFormatError(f"Station count {count} exceeds snapshot size", offset=0)
    stations = [_read_station(r) for _ in range(count)]
    if r.remaining:
        msg = f"{r.remaining} trailing bytes after last station"
        raise SnapshotFormatError(msg, offset=len(data) - r.remaining)
    return stations
