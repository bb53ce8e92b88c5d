from __future__ import annotations

import hashlib
import logging
import re
import time
from typing import Any

import httpx
from django.conf import settings
from django.core.cache import cache

from waypoint_planner.exceptions import ExternalServiceError, InvalidLocationError
from waypoint_planner.services.types import GeoPoint

logger = logging.getLogger(__name__)

COORDINATE_PATTERN = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


def parse_coordinates(query: str) -> GeoPoint | None:
    # Ranges are not checked here; the order search rejects bad coordinates.
    match = COORDINATE_PATTERN.match(query)
    if match is None:
        return None
    return GeoPoint(
        latitude=float(match.group(1)),
        longitude=float(match.group(2)),
        label=query.strip(),
    )


class GeocodingClient:
    def __init__(self) -> None:
        self.base_url = settings.GEOCODING_BASE_URL.rstrip("/")
        self.timeout = settings.GEOCODING_TIMEOUT_SECONDS
        self.retry_count = settings.GEOCODING_RETRY_COUNT
        self.user_agent = settings.GEOCODING_USER_AGENT
        self.country_code = settings.GEOCODING_COUNTRY_CODE

    def resolve(self, query: str) -> GeoPoint:
        if not query or not query.strip():
            raise InvalidLocationError("Location must not be empty")

        parsed = parse_coordinates(query)
        if parsed is not None:
            return parsed
        return self.geocode(query.strip())

    def geocode(self, query: str) -> GeoPoint:
        cache_key = self._cache_key(query, self.country_code)
        cached = cache.get(cache_key)
        if cached:
            return GeoPoint(
                latitude=cached["latitude"],
                longitude=cached["longitude"],
                label=cached["label"],
            )

        params: dict[str, Any] = {
            "q": query,
            "format": "jsonv2",
            "limit": 1,
            "addressdetails": 0,
        }
        if self.country_code:
            params["countrycodes"] = self.country_code

        for attempt in range(self.retry_count + 1):
            try:
                response = httpx.get(
                    f"{self.base_url}/search",
                    params=params,
                    timeout=self.timeout,
                    headers={
                        "Accept": "application/json",
                        "User-Agent": self.user_agent,
                    },
                )
                response.raise_for_status()
                point = self._parse_result(response.json(), query)
                cache.set(
                    cache_key,
                    {
                        "latitude": point.latitude,
                        "longitude": point.longitude,
                        "label": point.label,
                    },
                    timeout=settings.GEOCODE_CACHE_TTL_SECONDS,
                )
                return point
            except InvalidLocationError:
                raise
            except (httpx.HTTPError, ValueError) as exc:
                if attempt >= self.retry_count:
                    raise ExternalServiceError("Geocoding request failed") from exc
                logger.warning(
                    "Geocoding attempt %s for %r failed: %s", attempt + 1, query, exc
                )
                time.sleep(0.3 * (attempt + 1))

        raise ExternalServiceError("Geocoding request failed")

    @staticmethod
    def _cache_key(query: str, country_code: str) -> str:
        digest = hashlib.sha256(f"{query.lower()}|{country_code}".encode()).hexdigest()
        return f"geocode:{digest}"

    @staticmethod
    def _parse_result(payload: Any, query: str) -> GeoPoint:
        if not isinstance(payload, list) or not payload:
            raise InvalidLocationError(f"No results for: {query}")

        first = payload[0]
        try:
            latitude = float(first["lat"])
            longitude = float(first["lon"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidLocationError("Invalid geocoding response") from exc

        return GeoPoint(
            latitude=latitude,
            longitude=longitude,
            label=str(first.get("display_name") or query),
        )
