"""Per-frequency entry points returning typed frames.

Obtained from :meth:`Meteostat.hourly`, :meth:`Meteostat.daily`,
:meth:`Meteostat.monthly` and :meth:`Meteostat.climate`::

    async with await Meteostat.create() as client:
        daily = await client.daily().location(52.52, 13.40, required=RequiredData.full_year(2022))
        print(daily.get_for_period(Year(2022)).collect())
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from .frames import ClimateFrame, DailyFrame, FrequencyFrame, HourlyFrame, MonthlyFrame
from .frequency import Frequency
from .inventory import RequiredData

if TYPE_CHECKING:
    from .client import Meteostat

FrameT = TypeVar("FrameT", bound=FrequencyFrame)


class _FrequencyRequest(Generic[FrameT]):
    __slots__ = ("_client",)

    frequency: Frequency
    frame_type: type[FrameT]

    def __init__(self, client: Meteostat) -> None:
        self._client = client

    async def station(self, station_id: str) -> FrameT:
        """Typed frame for one station, downloading its series on first use."""
        raw = await self._client.from_station(station_id, self.frequency)
        return self.frame_type.from_raw(raw)

    async def location(
        self,
        latitude: float,
        longitude: float,
        *,
        max_km: float | None = None,
        k: int | None = None,
        required: RequiredData | None = None,
    ) -> FrameT:
        """Typed frame for the nearest station with coverage for this frequency.

        Arguments left as ``None`` fall back to the client defaults.

        Raises:
            NoStationWithinRadiusError: If no candidate station qualifies.
            NoDataFoundForNearbyStationsError: If every candidate failed.
        """
        raw = await self._client.from_location(
            latitude,
            longitude,
            self.frequency,
            max_km=max_km,
            k=k,
            required=required,
        )
        return self.frame_type.from_raw(raw)


class HourlyRequest(_FrequencyRequest[HourlyFrame]):
    __slots__ = ()
    frequency = Frequency.HOURLY
    frame_type = HourlyFrame


class DailyRequest(_FrequencyRequest[DailyFrame]):
    __slots__ = ()
    frequency = Frequency.DAILY
    frame_type = DailyFrame


class MonthlyRequest(_FrequencyRequest[MonthlyFrame]):
    __slots__ = ()
    frequency = Frequency.MONTHLY
    frame_type = MonthlyFrame


class ClimateRequest(_FrequencyRequest[ClimateFrame]):
    __slots__ = ()
    frequency = Frequency.CLIMATE
    frame_type = ClimateFrame
