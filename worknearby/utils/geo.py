"""Great-circle distance helpers used by the proximity matcher."""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0

LatLng = tuple[float, float]


def distance_km(
    origin_lat: float,
    origin_lng: float,
    target_lat: float,
    target_lng: float,
    *,
    radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """Haversine distance in kilometres between two coordinates given in degrees.

    Inputs are expected to be range-checked already. The intermediate term is
    clamped to [0, 1] so rounding near antipodal points cannot leave the domain
    of ``sqrt``.
    """

    phi1 = math.radians(origin_lat)
    phi2 = math.radians(target_lat)
    dphi = phi2 - phi1
    dlambda = math.radians(target_lng - origin_lng)

    sin_dphi = math.sin(dphi / 2.0)
    sin_dlambda = math.sin(dlambda / 2.0)

    a = sin_dphi**2 + math.cos(phi1) * math.cos(phi2) * sin_dlambda**2
    a = min(1.0, max(0.0, a))
    return 2.0 * radius_km * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))


def haversine_distance_km(point_a: LatLng, point_b: LatLng, *, radius_km: float = EARTH_RADIUS_KM) -> float:
    lat1, lng1 = point_a
    lat2, lng2 = point_b
    return distance_km(lat1, lng1, lat2, lng2, radius_km=radius_km)


__all__ = ["EARTH_RADIUS_KM", "LatLng", "distance_km", "haversine_distance_km"]
