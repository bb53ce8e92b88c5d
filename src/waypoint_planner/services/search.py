from __future__ import annotations

import logging
import math

from waypoint_planner.exceptions import CapacityExceededError, EmptyStopSetError
from waypoint_planner.services.geo import validate_point
from waypoint_planner.services.permutations import iter_orders
from waypoint_planner.services.scoring import score_order
from waypoint_planner.services.types import GeoPoint, Route, StopSet

logger = logging.getLogger(__name__)


def ensure_stop_count(count: int, cap: int) -> None:
    if count < 1:
        raise EmptyStopSetError("At least one intermediate stop is required")
    if count > cap:
        raise CapacityExceededError(requested=count, cap=cap)


def find_optimal_order(start: GeoPoint, stops: StopSet, end: GeoPoint, cap: int) -> Route:
    stop_points = tuple(stops)
    ensure_stop_count(len(stop_points), cap)

    validate_point(start, "start")
    for index, stop in enumerate(stop_points):
        validate_point(stop, "stop", index)
    validate_point(end, "end")

    # Lexicographic order plus a strict comparison: the earliest of equal routes wins.
    orders = iter_orders(len(stop_points))
    best_order = next(orders)
    best_distance = score_order(start, stop_points, best_order, end)
    for order in orders:
        distance = score_order(start, stop_points, order, end)
        if distance < best_distance:
            best_distance = distance
            best_order = order

    logger.debug(
        "Evaluated %s orders for %s stops; best %s at %.1f m",
        math.factorial(len(stop_points)),
        len(stop_points),
        best_order,
        best_distance,
    )
    return Route(
        start=start,
        stops=stop_points,
        order=best_order,
        end=end,
        total_distance_meters=best_distance,
    )
