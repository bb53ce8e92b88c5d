from __future__ import annotations

from collections.abc import Callable
from urllib.parse import quote

from django.conf import settings

from waypoint_planner.services.types import DirectionsLinks, GeoPoint, Route

# Same set of characters encodeURIComponent leaves alone.
_SAFE_CHARACTERS = "!~*'()"


def build_directions_links(route: Route) -> DirectionsLinks:
    return DirectionsLinks(
        coordinates_url=_directions_url(route, _coordinates),
        names_url=_directions_url(route, _name_or_coordinates),
    )


def _directions_url(route: Route, describe: Callable[[GeoPoint], str]) -> str:
    params = [
        ("origin", describe(route.start)),
        ("destination", describe(route.end)),
        ("travelmode", "driving"),
    ]
    if route.order:
        params.append(("waypoints", "|".join(describe(stop) for stop in route.ordered_stops)))

    query = "&".join(f"{key}={quote(value, safe=_SAFE_CHARACTERS)}" for key, value in params)
    return f"{settings.DIRECTIONS_BASE_URL}&{query}"


def _coordinates(point: GeoPoint) -> str:
    return point.as_lat_lon()


def _name_or_coordinates(point: GeoPoint) -> str:
    return point.label or point.as_lat_lon()
