from __future__ import annotations

import json
import logging
from typing import Any

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from pydantic import ValidationError

from waypoint_planner.exceptions import (
    CapacityExceededError,
    EmptyStopSetError,
    ExternalServiceError,
    InvalidInputError,
    InvalidLocationError,
)
from waypoint_planner.schemas import WaypointOrderRequest
from waypoint_planner.services.planner import WaypointPlannerService

logger = logging.getLogger(__name__)

_planner_service: WaypointPlannerService | None = None


def get_waypoint_planner() -> WaypointPlannerService:
    global _planner_service
    if _planner_service is None:
        _planner_service = WaypointPlannerService()
    return _planner_service


@require_GET
def health_view(_: HttpRequest) -> HttpResponse:
    return JsonResponse({"status": "ok", "max_stops": int(settings.WAYPOINT_MAX_STOPS)})


@csrf_exempt
@require_POST
def waypoint_order_view(request: HttpRequest) -> HttpResponse:
    payload = _parse_json_payload(request)
    if isinstance(payload, JsonResponse):
        return payload

    try:
        order_request = WaypointOrderRequest.model_validate(payload)
    except ValidationError as exc:
        return JsonResponse(
            {
                "error": {
                    "code": "validation_error",
                    "message": "Invalid request payload",
                    "details": exc.errors(include_url=False, include_context=False),
                }
            },
            status=400,
        )

    planner = get_waypoint_planner()
    try:
        response = planner.plan(order_request)
    except EmptyStopSetError as exc:
        return _error_response("empty_stop_set", str(exc), status=400)
    except CapacityExceededError as exc:
        logger.info("Rejected %s stops (cap %s)", exc.requested, exc.cap)
        return _error_response(
            "capacity_exceeded",
            str(exc),
            status=422,
            requested=exc.requested,
            cap=exc.cap,
        )
    except InvalidInputError as exc:
        return _error_response(
            "invalid_input",
            str(exc),
            status=400,
            point=exc.role,
            stop_index=exc.stop_index,
        )
    except InvalidLocationError as exc:
        return _error_response("invalid_location", str(exc), status=400)
    except ExternalServiceError as exc:
        return _error_response("upstream_error", str(exc), status=502)

    return JsonResponse(response.model_dump(mode="json"), status=200)


def _parse_json_payload(request: HttpRequest) -> dict[str, Any] | JsonResponse:
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except json.JSONDecodeError:
        return _error_response("invalid_json", "Request body must be valid JSON", status=400)

    if not isinstance(payload, dict):
        return _error_response("invalid_json", "JSON body must be an object", status=400)

    return payload


def _error_response(code: str, message: str, status: int, **details: Any) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message, **details}}, status=status)
