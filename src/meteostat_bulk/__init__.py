"""
meteostat_bulk: asyncio access to the Meteostat bulk weather archive.

Historical hourly, daily, monthly and climate-normal data is fetched per
station from ``https://bulk.meteostat.net/v2/``, stored once as Parquet in a
local cache, and returned as :class:`polars.LazyFrame` objects.  Stations can
be addressed by id or found by coordinates.

Basic usage:
    import asyncio
    from meteostat_bulk import Frequency, Meteostat, Year

    async def main():
        async with await Meteostat.create() as client:
            # Nearest station to Berlin with daily data
            raw = await client.from_location(52.52, 13.40, Frequency.DAILY)

            # Typed access
            daily = await client.daily().station("10384")
            print(daily.get_for_period(Year(2022)).collect())

    asyncio.run(main())

Logging goes through the standard :mod:`logging` module under the
``meteostat_bulk`` logger; attach a handler to see it.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Client
from .client import DEFAULT_FIND_LIMIT, DEFAULT_LOCATION_LIMIT, DEFAULT_MAX_KM, Meteostat
from .condition import WeatherCondition

# Exceptions
from .exceptions import (
    CacheDecodeError,
    CacheDeletionError,
    CacheDirCreationError,
    CacheDirResolutionError,
    CacheEncodeError,
    CacheMetadataReadError,
    CachePathError,
    CacheReadError,
    CacheWriteError,
    CatalogCacheError,
    CsvReadError,
    CsvReadIoError,
    DataParseError,
    DateParsingError,
    DownloadIoError,
    ExpectedSingleRowError,
    FrameCacheError,
    HttpStatusError,
    JsonParseError,
    MeteostatError,
    NetworkError,
    NetworkRequestError,
    NoDataFoundForNearbyStationsError,
    NoStationWithinRadiusError,
    ParquetScanError,
    ParquetWriteError,
    ParquetWriteIoError,
    SnapshotFormatError,
    StationSelectionError,
    TaskJoinError,
)
from .frame_cache import FrameCache

# Typed frames and records
from .frames import ClimateFrame, DailyFrame, HourlyFrame, MonthlyFrame
from .frequency import Frequency
from .index import StationIndex
from .inventory import InventoryRequest, RequiredData
from .materialize import FrameMaterializer
from .periods import (
    DateSpan,
    DateTimeSpan,
    Month,
    MonthSpan,
    Year,
    days_in_month,
    resolve_date_range,
    resolve_datetime_range,
    resolve_month_range,
)
from .records import (
    Climate,
    ClimateField,
    Daily,
    DailyField,
    Hourly,
    HourlyField,
    Monthly,
    MonthlyField,
)

# Station model
from .station import (
    DateRange,
    Identifiers,
    Inventory,
    Location,
    SpatialResult,
    Station,
    YearRange,
)

__all__ = [
    "DEFAULT_FIND_LIMIT",
    "DEFAULT_LOCATION_LIMIT",
    "DEFAULT_MAX_KM",
    "CacheDecodeError",
    "CacheDeletionError",
    "CacheDirCreationError",
    "CacheDirResolutionError",
    "CacheEncodeError",
    "CacheMetadataReadError",
    "CachePathError",
    "CacheReadError",
    "CacheWriteError",
    "CatalogCacheError",
    "Climate",
    "ClimateField",
    "ClimateFrame",
    "CsvReadError",
    "CsvReadIoError",
    "Daily",
    "DailyField",
    "DailyFrame",
    "DataParseError",
    "DateParsingError",
    "DateRange",
    "DateSpan",
    "DateTimeSpan",
    "DownloadIoError",
    "ExpectedSingleRowError",
    "FrameCache",
    "FrameCacheError",
    "FrameMaterializer",
    "Frequency",
    "Hourly",
    "HourlyField",
    "HourlyFrame",
    "HttpStatusError",
    "Identifiers",
    "Inventory",
    "InventoryRequest",
    "JsonParseError",
    "Location",
    "Meteostat",
    "MeteostatError",
    "Month",
    "MonthSpan",
    "Monthly",
    "MonthlyField",
    "MonthlyFrame",
    "NetworkError",
    "NetworkRequestError",
    "NoDataFoundForNearbyStationsError",
    "NoStationWithinRadiusError",
    "ParquetScanError",
    "ParquetWriteError",
    "ParquetWriteIoError",
    "RequiredData",
    "SnapshotFormatError",
    "SpatialResult",
    "Station",
    "StationIndex",
    "StationSelectionError",
    "TaskJoinError",
    "WeatherCondition",
    "Year",
    "YearRange",
    "__version__",
    "days_in_month",
    "resolve_date_range",
    "resolve_datetime_range",
    "resolve_month_range",
]
