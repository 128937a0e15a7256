"""Tests for meteostat_bulk.inventory."""

from __future__ import annotations

from datetime import date

import pytest

from conftest import make_station
from meteostat_bulk.frequency import Frequency
from meteostat_bulk.inventory import InventoryRequest, RequiredData, covers, station_meets
from meteostat_bulk.station import DateRange, YearRange


class TestRequiredData:
    def test_any(self) -> None:
        req = RequiredData.any()
        assert req.kind == "any"
        assert req.start is None
        assert req.end is None

    def test_full_year(self) -> None:
        req = RequiredData.full_year(2020)
        assert req.kind == "full_year"
        assert req.year == 2020
        assert (req.start, req.end) == (date(2020, 1, 1), date(2020, 12, 31))

    def test_range(self) -> None:
        req = RequiredData.range(date(2020, 3, 1), date(2020, 4, 1))
        assert req.kind == "range"
        assert (req.start, req.end) == (date(2020, 3, 1), date(2020, 4, 1))

    def test_range_reversed(self) -> None:
        with pytest.raises(ValueError, match="after"):
            RequiredData.range(date(2021, 1, 1), date(2020, 1, 1))

    def test_specific_date(self) -> None:
        req = RequiredData.specific_date(date(2020, 5, 5))
        assert req.start == req.end == date(2020, 5, 5)

    def test_inventory_request_default(self) -> None:
        assert InventoryRequest(Frequency.DAILY).required == RequiredData.any()


class TestCovers:
    RANGE = DateRange(date(2000, 1, 1), date(2010, 6, 30))

    def test_empty_never_covers(self) -> None:
        assert not covers(DateRange(), RequiredData.any())
        assert not covers(DateRange(date(2000, 1, 1), None), RequiredData.any())
        assert not covers(YearRange(None, 2000), RequiredData.any())

    def test_any(self) -> None:
        assert covers(self.RANGE, RequiredData.any())

    def test_full_year_inside(self) -> None:
        assert covers(self.RANGE, RequiredData.full_year(2005))

    def test_full_year_partially_outside(self) -> None:
        # Coverage stops in June 2010
        assert not covers(self.RANGE, RequiredData.full_year(2010))

    def test_range_boundaries_inclusive(self) -> None:
        assert covers(self.RANGE, RequiredData.range(date(2000, 1, 1), date(2010, 6, 30)))
        assert not covers(self.RANGE, RequiredData.range(date(1999, 12, 31), date(2005, 1, 1)))
        assert not covers(self.RANGE, RequiredData.range(date(2005, 1, 1), date(2010, 7, 1)))

    def test_specific_date(self) -> None:
        assert covers(self.RANGE, RequiredData.specific_date(date(2010, 6, 30)))
        assert not covers(self.RANGE, RequiredData.specific_date(date(2010, 7, 1)))

    def test_year_range_compares_years(self) -> None:
        rng = YearRange(1990, 2020)
        assert covers(rng, RequiredData.full_year(2020))
        assert covers(rng, RequiredData.specific_date(date(2020, 12, 31)))
        assert not covers(rng, RequiredData.full_year(2021))
        assert not covers(rng, RequiredData.range(date(1989, 12, 31), date(1995, 1, 1)))


class TestStationMeets:
    def test_no_frequency(self) -> None:
        station = make_station("a", 0, 0, daily=None, hourly=None, monthly=None, normals=None)
        assert station_meets(station)

    def test_frequency_without_coverage(self) -> None:
        station = make_station("a", 0, 0, hourly=None)
        assert not station_meets(station, Frequency.HOURLY)
        assert station_meets(station, Frequency.DAILY)

    def test_climate_uses_normals(self) -> None:
        station = make_station("a", 0, 0, normals=(1961, 1990))
        assert station_meets(station, Frequency.CLIMATE, RequiredData.full_year(1975))
        assert not station_meets(station, Frequency.CLIMATE, RequiredData.full_year(2000))

    def test_missing_requirement_means_any(self) -> None:
        station = make_station("a", 0, 0)
        assert station_meets(station, Frequency.MONTHLY, None)
