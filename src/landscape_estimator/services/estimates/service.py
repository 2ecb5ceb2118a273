"""Drive-time estimates combining the maps provider with route density."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Sequence

from ...config import settings
from ...data.branches import BRANCHES, get_branch
from ...data.properties_repository import list_active_properties
from ...errors import InvalidArgumentError, UpstreamUnavailableError
from ...models.domain import CandidateProperty, Coordinate, DriveTimeEstimate, ServiceBranch
from ..maps import BranchMatch, GeocodeResult
from ..proximity import adjust_drive_time, compute_proximity

logger = logging.getLogger(__name__)

PropertyLookup = Callable[[Optional[str]], Sequence[CandidateProperty]]


class MapsProvider(Protocol):
    def geocode(self, address: str) -> Optional[GeocodeResult]: ...

    def drive_time_hours(self, origin: Coordinate, destination: Coordinate) -> Optional[float]: ...

    def closest_branch(self, origin: Coordinate, branches: Sequence[ServiceBranch]) -> Optional[BranchMatch]: ...


def _resolve_address(address: str, maps: MapsProvider) -> GeocodeResult:
    if not address or not address.strip():
        raise InvalidArgumentError("Property address is required.")
    geocoded = maps.geocode(address)
    if geocoded is None:
        raise InvalidArgumentError("Could not find property address")
    return geocoded


def estimate_drive_time(
    address: str,
    branch_code: str,
    *,
    maps: MapsProvider,
    radius_miles: float | None = None,
    lookup: PropertyLookup | None = None,
) -> DriveTimeEstimate:
    """Geocode the property, time the drive from its branch, then discount for density.

    When the active-property store is empty or cannot be reached the unadjusted
    baseline is returned with ``proximity_applied`` left False. A populated store
    with nothing near the property yields the isolated tier.
    """

    branch = get_branch(branch_code)
    radius = settings.default_radius_miles if radius_miles is None else radius_miles
    geocoded = _resolve_address(address, maps)

    hours = maps.drive_time_hours(geocoded.location, branch.location)
    if hours is None:
        raise UpstreamUnavailableError("Could not calculate distance")
    baseline = round(hours, 1)

    estimate = DriveTimeEstimate(
        branch=branch,
        origin=geocoded.location,
        formatted_address=geocoded.formatted_address,
        baseline_hours=baseline,
        adjusted_hours=baseline,
    )

    try:
        candidates = (lookup or list_active_properties)(None)
    except UpstreamUnavailableError as exc:
        logger.warning("Active properties unavailable, using baseline drive time: %s", exc)
        return estimate
    if not candidates:
        logger.info("No active properties stored, using baseline drive time")
        return estimate

    result = compute_proximity(geocoded.location, branch.code, radius, candidates)
    estimate.proximity = result
    estimate.adjusted_hours = adjust_drive_time(baseline, result)
    estimate.proximity_applied = True
    logger.info(
        "Drive time for %s via %s: %.1f h baseline, %.1f h adjusted (%s)",
        geocoded.formatted_address or address,
        branch.code,
        baseline,
        estimate.adjusted_hours,
        result.summary,
    )
    return estimate


def suggest_branch(address: str, *, maps: MapsProvider) -> tuple[GeocodeResult, BranchMatch]:
    """Closest branch by driving distance for a free-text address."""

    geocoded = _resolve_address(address, maps)
    match = maps.closest_branch(geocoded.location, BRANCHES)
    if match is None:
        raise UpstreamUnavailableError("Could not determine closest branch")
    return geocoded, match
