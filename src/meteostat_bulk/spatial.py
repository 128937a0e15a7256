"""Spatial distance utilities for weather station search."""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE = 111.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres.

    Uses the Haversine formula on a spherical earth of radius
    :data:`EARTH_RADIUS_KM`.  All arguments are in decimal degrees.

    Args:
        lat1: Latitude of point 1 (decimal degrees, north positive).
        lon1: Longitude of point 1 (decimal degrees, east positive).
        lat2: Latitude of point 2.
        lon2: Longitude of point 2.

    Returns:
        Distance in kilometres.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlmb = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    # Clamp against floating-point overshoot near antipodal points.
    return EARTH_RADIUS_KM * 2.0 * math.asin(math.sqrt(min(1.0, a)))


def planar_sq_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Squared Euclidean distance in raw degree space.

    Not a geographic distance; only used to order nearby candidates.
    """
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    return dlat * dlat + dlon * dlon


def bounding_box(lat: float, lon: float, radius_km: float) -> tuple[float, float, float, float] | None:
    """Degree box that contains every point within *radius_km* of (lat, lon).

    A one-degree margin is added on every side.  The longitude bounds are
    widened by ``1 / cos(lat)``; near the poles, or where the box would
    wrap past the antimeridian, the longitude bounds fall back to the
    full ``[-180, 180]`` span.

    Returns:
        ``(lat_min, lat_max, lon_min, lon_max)``, or ``None`` if the radius
        is not finite.
    """
    if not math.isfinite(radius_km):
        return None
    delta_deg = radius_km / KM_PER_DEGREE + 1.0
    lat_min = lat - delta_deg
    lat_max = lat + delta_deg
    cos_lat = math.cos(math.radians(lat))
    if lat_min <= -90.0 or lat_max >= 90.0 or cos_lat < 0.01:
        return lat_min, lat_max, -180.0, 180.0
    lon_delta = delta_deg / cos_lat
    lon_min = lon - lon_delta
    lon_max = lon + lon_delta
    if lon_min < -180.0 or lon_max > 180.0:
        return lat_min, lat_max, -180.0, 180.0
    return lat_min, lat_max, lon_min, lon_max
