"""HTTP client for the Google Maps geocoding and distance matrix services."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Sequence

import httpx

from ...config import settings
from ...errors import UpstreamUnavailableError
from ...models.domain import Coordinate, ServiceBranch

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600.0


@dataclass(frozen=True, slots=True)
class GeocodeResult:
    location: Coordinate
    formatted_address: str | None


@dataclass(frozen=True, slots=True)
class BranchMatch:
    branch: ServiceBranch
    distance_meters: float
    duration_hours: float


class GoogleMapsClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.google_maps_api_key
        if not self.api_key:
            raise UpstreamUnavailableError(
                "Google Maps API key is not configured. Set LSE_GOOGLE_MAPS_API_KEY."
            )
        self.base_url = (base_url or settings.google_maps_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.maps_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.maps_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.maps_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )

    def _get_json(self, endpoint: str, params: dict[str, Any]) -> dict:
        url = f"{self.base_url}/{endpoint}/json"
        query = {**params, "key": self.api_key}
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=query)
                    response.raise_for_status()
                    return response.json()
                except httpx.HTTPStatusError as exc:
                    # 4xx is final, only 5xx is retried
                    if exc.response.status_code < 500:
                        raise UpstreamUnavailableError(
                            f"Google Maps {endpoint} request rejected with HTTP {exc.response.status_code}"
                        ) from exc
                    error: Exception = exc
                except (httpx.TimeoutException, httpx.NetworkError) as exc:
                    error = exc
                except ValueError as exc:
                    raise UpstreamUnavailableError(f"Google Maps {endpoint} returned invalid JSON") from exc

                attempt += 1
                if attempt > self.max_retries:
                    logger.warning("Google Maps %s failed after %d attempts: %s", endpoint, attempt, error)
                    raise UpstreamUnavailableError(f"Google Maps {endpoint} unavailable: {error}") from error
                wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                logger.debug(
                    "Google Maps %s error, retrying in %.1fs (attempt %d/%d): %s",
                    endpoint,
                    wait_time,
                    attempt,
                    self.max_retries,
                    error,
                )
                time.sleep(wait_time)
        finally:
            client.close()

    def geocode(self, address: str) -> GeocodeResult | None:
        """Resolve a free-text address; None when the provider finds nothing."""

        if not address or not address.strip():
            return None
        data = self._get_json("geocode", {"address": address.strip()})
        status = data.get("status")
        results = data.get("results") or []
        if status != "OK" or not results:
            if status not in ("OK", "ZERO_RESULTS"):
                logger.warning("Geocoding '%s' returned status %s", address, status)
            return None
        first = results[0]
        location = first["geometry"]["location"]
        return GeocodeResult(
            location=Coordinate(float(location["lat"]), float(location["lng"])),
            formatted_address=first.get("formatted_address"),
        )

    def _distance_matrix(self, origin: Coordinate, destinations: Sequence[Coordinate]) -> list[dict]:
        data = self._get_json(
            "distancematrix",
            {
                "origins": f"{origin.latitude},{origin.longitude}",
                "destinations": "|".join(f"{d.latitude},{d.longitude}" for d in destinations),
                "units": "imperial",
                "mode": "driving",
            },
        )
        if data.get("status") != "OK":
            logger.warning("Distance matrix returned status %s", data.get("status"))
            return []
        rows = data.get("rows") or []
        return rows[0].get("elements", []) if rows else []

    def drive_time_hours(self, origin: Coordinate, destination: Coordinate) -> float | None:
        """Driving duration in hours, or None when no route exists."""

        elements = self._distance_matrix(origin, [destination])
        if not elements or elements[0].get("status") != "OK":
            return None
        return elements[0]["duration"]["value"] / SECONDS_PER_HOUR

    def closest_branch(self, origin: Coordinate, branches: Sequence[ServiceBranch]) -> BranchMatch | None:
        """Branch with the shortest driving distance from ``origin``."""

        if not branches:
            return None
        elements = self._distance_matrix(origin, [branch.location for branch in branches])
        best: BranchMatch | None = None
        for branch, element in zip(branches, elements):
            if element.get("status") != "OK":
                continue
            distance = float(element["distance"]["value"])
            if best is None or distance < best.distance_meters:
                best = BranchMatch(
                    branch=branch,
                    distance_meters=distance,
                    duration_hours=element["duration"]["value"] / SECONDS_PER_HOUR,
                )
        return best
