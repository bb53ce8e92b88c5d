from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class GeoPoint:
    latitude: float
    longitude: float
    label: str | None = None

    def as_lat_lon(self) -> str:
        return f"{self.latitude},{self.longitude}"


StopSet = Sequence[GeoPoint]


@dataclass(slots=True, frozen=True)
class Route:
    start: GeoPoint
    stops: tuple[GeoPoint, ...]
    order: tuple[int, ...]
    end: GeoPoint
    total_distance_meters: float

    @property
    def ordered_stops(self) -> list[GeoPoint]:
        return [self.stops[index] for index in self.order]

    @property
    def waypoints(self) -> list[GeoPoint]:
        return [self.start, *self.ordered_stops, self.end]


@dataclass(slots=True, frozen=True)
class DirectionsLinks:
    coordinates_url: str
    names_url: str
