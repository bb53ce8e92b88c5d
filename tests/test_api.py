from __future__ import annotations

import json

import httpx
import pytest

from waypoint_planner.exceptions import ExternalServiceError, InvalidLocationError
from waypoint_planner.services.geocoding import GeocodingClient
from waypoint_planner.services.planner import WaypointPlannerService
from waypoint_planner.services.types import GeoPoint

URL = "/api/v1/waypoint-order"


def _post(api_client, payload):
    return api_client.post(URL, data=json.dumps(payload), content_type="application/json")


@pytest.fixture
def planner(settings, mocker):
    settings.WAYPOINT_MAX_STOPS = 6
    mocker.patch(
        "waypoint_planner.services.geocoding.httpx.get",
        side_effect=AssertionError("unexpected geocoding request"),
    )
    geocoder = mocker.Mock(wraps=GeocodingClient())
    service = WaypointPlannerService(geocoding_client=geocoder)
    mocker.patch("waypoint_planner.views.get_waypoint_planner", return_value=service)
    return service


def test_health_endpoint_reports_stop_cap(api_client, settings) -> None:
    settings.WAYPOINT_MAX_STOPS = 7

    response = api_client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "max_stops": 7}


def test_invalid_json_returns_400(api_client) -> None:
    response = api_client.post(URL, data="{not json", content_type="application/json")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_json"


def test_validation_error_returns_400(api_client) -> None:
    response = _post(api_client, {"start": "0,0"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"


def test_collinear_stops_are_ordered(api_client, planner) -> None:
    response = _post(
        api_client,
        {
            "start": "0,0",
            "stops": [
                {"latitude": 0.0, "longitude": 2.0, "label": "Far"},
                {"latitude": 0.0, "longitude": 1.0, "label": "Near"},
            ],
            "end": "0,3",
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["order"] == [1, 0]
    assert [stop["label"] for stop in payload["stops"]] == ["Near", "Far"]
    assert [stop["input_index"] for stop in payload["stops"]] == [1, 0]
    assert [stop["position"] for stop in payload["stops"]] == [1, 2]
    assert payload["start"] == {"latitude": 0.0, "longitude": 0.0, "label": "0,0"}
    assert len(payload["summary"]["leg_distances_meters"]) == 3
    assert payload["summary"]["total_distance_km"] == pytest.approx(333.58, abs=0.01)
    assert payload["max_stops"] == 6
    assert "waypoints=0.0%2C1.0%7C0.0%2C2.0" in payload["links"]["coordinates"]
    assert planner.geocoding_client.resolve.call_count == 2


def test_addresses_are_resolved_through_geocoder(api_client, planner) -> None:
    resolved = {
        "Home": GeoPoint(43.32, -79.80, "Home, Hamilton"),
        "Alice": GeoPoint(43.34, -79.83, "Alice, Hamilton"),
        "School": GeoPoint(43.2557, -79.8711, "School, Hamilton"),
    }
    planner.geocoding_client.resolve.side_effect = resolved.__getitem__

    response = _post(api_client, {"start": "Home", "stops": ["Alice"], "end": "School"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["order"] == [0]
    assert payload["stops"][0]["label"] == "Alice, Hamilton"
    assert planner.geocoding_client.resolve.call_count == 3


def test_empty_stop_set_returns_400(api_client, planner) -> None:
    response = _post(api_client, {"start": "0,0", "stops": [], "end": "0,3"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "empty_stop_set"


def test_capacity_exceeded_returns_422_without_geocoding(api_client, planner) -> None:
    stops = [f"Stop {index}" for index in range(7)]

    response = _post(api_client, {"start": "Home", "stops": stops, "end": "School"})

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "capacity_exceeded"
    assert error["requested"] == 7
    assert error["cap"] == 6
    planner.geocoding_client.resolve.assert_not_called()


def test_request_can_lower_the_cap(api_client, planner) -> None:
    response = _post(
        api_client,
        {"start": "0,0", "stops": ["0,1", "0,2", "0,3"], "end": "0,4", "max_stops": 2},
    )

    assert response.status_code == 422
    assert response.json()["error"]["cap"] == 2


def test_request_cannot_raise_the_cap(api_client, planner) -> None:
    stops = [f"0,{index}" for index in range(1, 8)]

    response = _post(api_client, {"start": "0,0", "stops": stops, "end": "0,9", "max_stops": 50})

    assert response.status_code == 422
    assert response.json()["error"]["cap"] == 6


def test_out_of_range_stop_returns_invalid_input(api_client, planner) -> None:
    response = _post(
        api_client,
        {
            "start": "0,0",
            "stops": ["0,1", {"latitude": 95.0, "longitude": 1.0}],
            "end": "0,3",
        },
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "invalid_input"
    assert error["point"] == "stop"
    assert error["stop_index"] == 1


def test_unresolvable_location_returns_400(api_client, planner) -> None:
    planner.geocoding_client.resolve.side_effect = InvalidLocationError("No results for: Atlantis")

    response = _post(api_client, {"start": "Atlantis", "stops": ["0,1"], "end": "0,3"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_location"


def test_geocoder_outage_returns_502(api_client, planner) -> None:
    planner.geocoding_client.resolve.side_effect = ExternalServiceError("Geocoding request failed")

    response = _post(api_client, {"start": "Home", "stops": ["Alice"], "end": "School"})

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "upstream_error"


def test_geocoder_html_page_returns_502(api_client, settings, mocker) -> None:
    settings.GEOCODING_RETRY_COUNT = 0
    mocker.patch(
        "waypoint_planner.services.geocoding.httpx.get",
        return_value=httpx.Response(
            200,
            text="<html>rate limited</html>",
            request=httpx.Request("GET", "https://geocoder.test/search"),
        ),
    )
    service = WaypointPlannerService(geocoding_client=GeocodingClient())
    mocker.patch("waypoint_planner.views.get_waypoint_planner", return_value=service)

    response = _post(api_client, {"start": "Hamilton, ON", "stops": ["0,1"], "end": "0,3"})

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "upstream_error"
