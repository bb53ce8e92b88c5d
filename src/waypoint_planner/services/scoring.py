from __future__ import annotations

from collections.abc import Iterator, Sequence

from waypoint_planner.services.geo import haversine_meters
from waypoint_planner.services.types import GeoPoint, StopSet


# Points must already be range-checked (see find_optimal_order).
def _distance(a: GeoPoint, b: GeoPoint) -> float:
    return haversine_meters(a.latitude, a.longitude, b.latitude, b.longitude)


def _iter_legs(
    start: GeoPoint, stops: StopSet, order: Sequence[int], end: GeoPoint
) -> Iterator[float]:
    previous = start
    for index in order:
        stop = stops[index]
        yield _distance(previous, stop)
        previous = stop
    yield _distance(previous, end)


def score_order(
    start: GeoPoint, stops: StopSet, order: Sequence[int], end: GeoPoint
) -> float:
    total = 0.0
    for distance in _iter_legs(start, stops, order, end):
        total += distance
    return total


def leg_distances(
    start: GeoPoint, stops: StopSet, order: Sequence[int], end: GeoPoint
) -> list[float]:
    return list(_iter_legs(start, stops, order, end))
