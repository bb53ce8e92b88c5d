from __future__ import annotations

import math

from waypoint_planner.exceptions import InvalidInputError
from waypoint_planner.services.types import GeoPoint

EARTH_RADIUS_METERS = 6_371_000.0
MAX_LATITUDE = 90.0
MAX_LONGITUDE = 180.0


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)

    # abs() keeps the result bit-for-bit symmetric in its arguments
    dlat = abs(lat2_rad - lat1_rad)
    dlon = abs(math.radians(lon2) - math.radians(lon1))

    h = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2.0) ** 2
    )
    return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(min(1.0, h)))


def coordinate_error(point: GeoPoint) -> str | None:
    latitude, longitude = point.latitude, point.longitude
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return "latitude and longitude must be finite numbers"
    if not -MAX_LATITUDE <= latitude <= MAX_LATITUDE:
        return f"latitude {latitude} is outside [-90, 90]"
    if not -MAX_LONGITUDE <= longitude <= MAX_LONGITUDE:
        return f"longitude {longitude} is outside [-180, 180]"
    return None


def validate_point(point: GeoPoint, role: str, stop_index: int | None = None) -> None:
    detail = coordinate_error(point)
    if detail is not None:
        raise InvalidInputError(role, stop_index, detail)


def great_circle_meters(a: GeoPoint, b: GeoPoint) -> float:
    validate_point(a, "point")
    validate_point(b, "point")
    return haversine_meters(a.latitude, a.longitude, b.latitude, b.longitude)
