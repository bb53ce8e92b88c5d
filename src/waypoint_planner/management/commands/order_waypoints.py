from __future__ import annotations

from typing import Any

from django.core.management.base import BaseCommand, CommandError
from pydantic import ValidationError

from waypoint_planner.exceptions import WaypointPlannerError
from waypoint_planner.schemas import WaypointOrderRequest
from waypoint_planner.services.planner import WaypointPlannerService


class Command(BaseCommand):
    help = "Find the shortest visiting order for a set of stops between a start and an end."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument("--start", required=True, help='Start address or "lat,lon"')
        parser.add_argument(
            "--stop",
            action="append",
            default=[],
            dest="stops",
            help='Intermediate stop address or "lat,lon" (repeatable)',
        )
        parser.add_argument("--end", required=True, help='End address or "lat,lon"')
        parser.add_argument(
            "--max-stops", type=int, default=None, help="Lower the configured stop cap"
        )

    def handle(self, *_: Any, **options: Any) -> None:
        try:
            request = WaypointOrderRequest(
                start=options["start"],
                stops=options["stops"],
                end=options["end"],
                max_stops=options["max_stops"],
            )
        except ValidationError as exc:
            raise CommandError(f"Invalid arguments: {exc}") from exc

        try:
            response = WaypointPlannerService().plan(request)
        except WaypointPlannerError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(f"Start: {response.start.label or _lat_lon(response.start)}")
        for stop in response.stops:
            self.stdout.write(
                f"{stop.position}. [{stop.input_index}] {stop.label or _lat_lon(stop)}"
            )
        self.stdout.write(f"End: {response.end.label or _lat_lon(response.end)}")
        self.stdout.write(
            self.style.SUCCESS(
                f"Total straight-line distance: {response.summary.total_distance_km:.2f} km"
            )
        )
        self.stdout.write(response.links.coordinates)


def _lat_lon(point: Any) -> str:
    return f"{point.latitude},{point.longitude}"
