"""Tests for meteostat_bulk.spatial."""

from __future__ import annotations

import math

from meteostat_bulk.spatial import bounding_box, haversine_km, planar_sq_distance


class TestHaversine:
    def test_same_point(self) -> None:
        assert haversine_km(52.52, 13.40, 52.52, 13.40) == 0.0

    def test_known_distance_berlin_to_munich(self) -> None:
        # Berlin (52.52, 13.40) to Munich (48.14, 11.58) ~ 504 km
        dist = haversine_km(52.52, 13.40, 48.14, 11.58)
        assert 500.0 < dist < 510.0

    def test_known_distance_london_to_paris(self) -> None:
        # London (51.51, -0.13) to Paris (48.86, 2.35) ~ 343 km
        dist = haversine_km(51.51, -0.13, 48.86, 2.35)
        assert 335.0 < dist < 350.0

    def test_antipodal_points(self) -> None:
        dist = haversine_km(90.0, 0.0, -90.0, 0.0)
        assert math.isclose(dist, math.pi * 6371.0, rel_tol=1e-6)

    def test_symmetry(self) -> None:
        d1 = haversine_km(52.52, 13.40, 40.71, -74.01)
        d2 = haversine_km(40.71, -74.01, 52.52, 13.40)
        assert math.isclose(d1, d2, rel_tol=1e-10)

    def test_across_antimeridian(self) -> None:
        # 179.5E to 179.5W at the equator is one degree, not 359
        dist = haversine_km(0.0, 179.5, 0.0, -179.5)
        assert 110.0 < dist < 112.0


class TestPlanarSqDistance:
    def test_value(self) -> None:
        assert planar_sq_distance(0.0, 0.0, 3.0, 4.0) == 25.0

    def test_orders_like_degrees(self) -> None:
        near = planar_sq_distance(52.5, 13.4, 52.6, 13.4)
        far = planar_sq_distance(52.5, 13.4, 53.5, 13.4)
        assert near < far


class TestBoundingBox:
    def test_contains_radius_plus_margin(self) -> None:
        lat_min, lat_max, lon_min, lon_max = bounding_box(52.0, 13.0, 111.0)  # type: ignore[misc]
        assert math.isclose(lat_min, 50.0)
        assert math.isclose(lat_max, 54.0)
        assert lon_min < 13.0 - 2.0
        assert lon_max > 13.0 + 2.0

    def test_infinite_radius(self) -> None:
        assert bounding_box(0.0, 0.0, math.inf) is None

    def test_near_pole_spans_all_longitudes(self) -> None:
        box = bounding_box(89.5, 10.0, 50.0)
        assert box is not None
        assert box[2:] == (-180.0, 180.0)

    def test_antimeridian_spans_all_longitudes(self) -> None:
        box = bounding_box(0.0, 179.8, 50.0)
        assert box is not None
        assert box[2:] == (-180.0, 180.0)
