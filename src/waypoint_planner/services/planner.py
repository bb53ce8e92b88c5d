from __future__ import annotations

import logging

from django.conf import settings

from waypoint_planner.schemas import (
    Coordinate,
    CoordinateInput,
    DirectionsLinksResponse,
    Location,
    OrderedStopResponse,
    RouteSummaryResponse,
    WaypointOrderRequest,
    WaypointOrderResponse,
)
from waypoint_planner.services.geocoding import GeocodingClient
from waypoint_planner.services.links import build_directions_links
from waypoint_planner.services.scoring import leg_distances
from waypoint_planner.services.search import ensure_stop_count, find_optimal_order
from waypoint_planner.services.types import GeoPoint

logger = logging.getLogger(__name__)


class WaypointPlannerService:
    def __init__(self, geocoding_client: GeocodingClient | None = None) -> None:
        self.geocoding_client = geocoding_client or GeocodingClient()

    def effective_cap(self, requested_cap: int | None = None) -> int:
        cap = int(settings.WAYPOINT_MAX_STOPS)
        if requested_cap is not None:
            cap = min(cap, requested_cap)
        return cap

    def plan(self, request: WaypointOrderRequest) -> WaypointOrderResponse:
        cap = self.effective_cap(request.max_stops)
        # Reject before resolving anything so oversized requests cost no lookups.
        ensure_stop_count(len(request.stops), cap)

        start = self.resolve(request.start)
        stops = [self.resolve(stop) for stop in request.stops]
        end = self.resolve(request.end)

        route = find_optimal_order(start, stops, end, cap)
        legs = leg_distances(route.start, route.stops, route.order, route.end)
        links = build_directions_links(route)
        logger.info(
            "Ordered %s stops, total %.1f m, order %s",
            len(route.stops),
            route.total_distance_meters,
            route.order,
        )

        return WaypointOrderResponse(
            start=_coordinate(route.start),
            end=_coordinate(route.end),
            order=list(route.order),
            stops=[
                OrderedStopResponse(
                    latitude=round(route.stops[index].latitude, 6),
                    longitude=round(route.stops[index].longitude, 6),
                    label=route.stops[index].label,
                    position=position,
                    input_index=index,
                )
                for position, index in enumerate(route.order, start=1)
            ],
            summary=RouteSummaryResponse(
                total_distance_meters=round(route.total_distance_meters, 1),
                total_distance_km=round(route.total_distance_meters / 1000.0, 2),
                leg_distances_meters=[round(leg, 1) for leg in legs],
            ),
            links=DirectionsLinksResponse(
                coordinates=links.coordinates_url,
                names=links.names_url,
            ),
            max_stops=cap,
        )

    def resolve(self, location: Location) -> GeoPoint:
        if isinstance(location, CoordinateInput):
            return GeoPoint(
                latitude=location.latitude,
                longitude=location.longitude,
                label=location.label,
            )
        return self.geocoding_client.resolve(location)


def _coordinate(point: GeoPoint) -> Coordinate:
    return Coordinate(
        latitude=round(point.latitude, 6),
        longitude=round(point.longitude, 6),
        label=point.label,
    )
