import math
from typing import Optional, Tuple

EARTH_RADIUS_KM = 6371.0088


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in kilometres"""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


def bounding_box(lat: float, lng: float, radius_km: float) -> Tuple[float, float, Optional[float], Optional[float]]:
    """
    Coarse (min_lat, max_lat, min_lng, max_lng) box containing the radius.

    Longitude bounds are None when the box reaches a pole or wraps the
    antimeridian; callers then filter on latitude only.
    """
    angular = radius_km / EARTH_RADIUS_KM
    d_lat = math.degrees(angular)
    min_lat, max_lat = lat - d_lat, lat + d_lat
    if min_lat <= -90 or max_lat >= 90:
        return max(min_lat, -90.0), min(max_lat, 90.0), None, None

    # widest longitude of a spherical circle lies poleward of its centre
    cos_lat = math.cos(math.radians(lat))
    if math.sin(angular) >= cos_lat:
        return min_lat, max_lat, None, None
    d_lng = math.degrees(math.asin(math.sin(angular) / cos_lat))
    min_lng, max_lng = lng - d_lng, lng + d_lng
    if min_lng < -180 or max_lng > 180:
        return min_lat, max_lat, None, None
    return min_lat, max_lat, min_lng, max_lng
