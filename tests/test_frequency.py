"""Tests for meteostat_bulk.frequency."""

from __future__ import annotations

import pytest

from meteostat_bulk.frequency import Frequency


class TestFrequency:
    @pytest.mark.parametrize(
        ("freq", "segment"),
        [
            (Frequency.HOURLY, "hourly"),
            (Frequency.DAILY, "daily"),
            (Frequency.MONTHLY, "monthly"),
            (Frequency.CLIMATE, "normals"),
        ],
    )
    def test_segment_and_prefix(self, freq: Frequency, segment: str) -> None:
        assert freq.segment == segment
        assert freq.cache_prefix == f"{segment}-"
        assert str(freq) == segment

    def test_hourly_columns(self) -> None:
        cols = Frequency.HOURLY.columns
        assert len(cols) == 13
        assert cols[:2] == ("date", "hour")
        assert cols[-1] == "coco"

    def test_daily_columns(self) -> None:
        assert Frequency.DAILY.columns == (
            "date",
            "tavg",
            "tmin",
            "tmax",
            "prcp",
            "snow",
            "wdir",
            "wspd",
            "wpgt",
            "pres",
            "tsun",
        )

    def test_monthly_and_climate_columns(self) -> None:
        assert Frequency.MONTHLY.columns[:2] == ("year", "month")
        assert Frequency.CLIMATE.columns[:3] == ("start_year", "end_year", "month")
        assert len(Frequency.MONTHLY.columns) == len(Frequency.CLIMATE.columns) == 9

    def test_lookup_by_value(self) -> None:
        assert Frequency("normals") is Frequency.CLIMATE
