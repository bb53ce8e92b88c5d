from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import CommandError, call_command


def test_order_waypoints_prints_visiting_order(settings) -> None:
    settings.WAYPOINT_MAX_STOPS = 4
    out = StringIO()

    call_command(
        "order_waypoints",
        start="0,0",
        stops=["0,2", "0,1"],
        end="0,3",
        stdout=out,
    )

    lines = out.getvalue().splitlines()
    assert lines[0] == "Start: 0,0"
    assert lines[1] == "1. [1] 0,1"
    assert lines[2] == "2. [0] 0,2"
    assert lines[3] == "End: 0,3"
    assert "333.58 km" in lines[4]
    assert lines[5].startswith("https://www.google.com/maps/dir/?api=1&origin=")


def test_order_waypoints_reports_capacity_errors(settings) -> None:
    settings.WAYPOINT_MAX_STOPS = 1

    with pytest.raises(CommandError, match="at most 1"):
        call_command("order_waypoints", start="0,0", stops=["0,1", "0,2"], end="0,3")


def test_order_waypoints_requires_a_stop() -> None:
    with pytest.raises(CommandError, match="At least one"):
        call_command("order_waypoints", start="0,0", end="0,3")
