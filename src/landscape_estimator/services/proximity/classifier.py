"""Route density classification for a property location."""

from __future__ import annotations

import logging
from typing import Iterable

from ...data.branches import get_branch
from ...models.domain import (
    CandidateProperty,
    Coordinate,
    NearbyProperty,
    ProximityQuery,
    ProximityResult,
)
from ..geospatial import distance_miles
from .tiers import describe_tier, tier_for_count

logger = logging.getLogger(__name__)


def find_nearby(query: ProximityQuery, candidates: Iterable[CandidateProperty]) -> list[NearbyProperty]:
    """Active same-branch candidates within the radius, nearest first.

    Equal distances are ordered by property id.
    """

    branch = query.branch.strip().lower()
    nearby: list[NearbyProperty] = []
    for candidate in candidates:
        if not candidate.active or candidate.branch.strip().lower() != branch:
            continue
        distance = distance_miles(query.origin, candidate.location)
        if distance <= query.radius_miles:
            nearby.append(NearbyProperty(property=candidate, distance_miles=distance))
    nearby.sort(key=lambda item: (item.distance_miles, item.property.property_id))
    return nearby


def classify(query: ProximityQuery, candidates: Iterable[CandidateProperty]) -> ProximityResult:
    get_branch(query.branch)
    nearby = find_nearby(query, candidates)
    count = len(nearby)
    tier = tier_for_count(count)
    logger.debug(
        "Proximity for branch %s within %s mi: %d nearby, factor %.2f",
        query.branch,
        query.radius_miles,
        count,
        tier.factor,
    )
    return ProximityResult(
        nearby=tuple(nearby),
        factor=tier.factor,
        description=tier.description,
        count=count,
        radius_miles=query.radius_miles,
        summary=describe_tier(tier, count, query.radius_miles),
    )


def compute_proximity(
    origin: Coordinate,
    branch: str,
    radius_miles: float,
    candidates: Iterable[CandidateProperty],
) -> ProximityResult:
    """Classify how clustered ``origin`` is among properties serviced by ``branch``.

    Raises InvalidArgumentError for a malformed origin, a blank or unknown
    branch, or a non-positive radius. An empty candidate set yields the isolated tier.
    """

    return classify(ProximityQuery(origin=origin, branch=branch, radius_miles=radius_miles), candidates)
