from __future__ import annotations

from typing import Annotated, Union

from pydantic import BaseModel, ConfigDict, Field

LocationQuery = Annotated[str, Field(min_length=1, max_length=300)]


class CoordinateInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    latitude: float
    longitude: float
    label: str | None = Field(default=None, max_length=300)


Location = Union[CoordinateInput, LocationQuery]


class WaypointOrderRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start: Location
    stops: list[Location] = Field(default_factory=list, max_length=100)
    end: Location
    max_stops: int | None = Field(default=None, ge=1)


class Coordinate(BaseModel):
    latitude: float
    longitude: float
    label: str | None = None


class OrderedStopResponse(Coordinate):
    position: int
    input_index: int


class RouteSummaryResponse(BaseModel):
    total_distance_meters: float
    total_distance_km: float
    leg_distances_meters: list[float]


class DirectionsLinksResponse(BaseModel):
    coordinates: str
    names: str


class WaypointOrderResponse(BaseModel):
    start: Coordinate
    end: Coordinate
    order: list[int]
    stops: list[OrderedStopResponse]
    summary: RouteSummaryResponse
    links: DirectionsLinksResponse
    max_stops: int
