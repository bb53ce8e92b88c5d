from __future__ import annotations


class WaypointPlannerError(Exception):
    """Base exception for waypoint planning errors."""


class ExternalServiceError(WaypointPlannerError):
    """Raised when an upstream API call fails."""


class InvalidLocationError(WaypointPlannerError):
    """Raised when a location query cannot be resolved to coordinates."""


class EmptyStopSetError(WaypointPlannerError):
    """Raised when an ordering is requested without any intermediate stops."""


class CapacityExceededError(WaypointPlannerError):
    """Raised when more stops are supplied than the search is allowed to enumerate."""

    def __init__(self, requested: int, cap: int) -> None:
        super().__init__(f"{requested} stops requested but at most {cap} are supported")
        self.requested = requested
        self.cap = cap


class InvalidInputError(WaypointPlannerError):
    """Raised when a coordinate lies outside the valid latitude/longitude range."""

    def __init__(self, role: str, stop_index: int | None = None, detail: str = "") -> None:
        label = role if stop_index is None else f"{role} {stop_index}"
        message = f"Invalid coordinates for {label}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.role = role
        self.stop_index = stop_index
