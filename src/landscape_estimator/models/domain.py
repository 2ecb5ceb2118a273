"""Domain models for branches, serviced properties and proximity results."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from ..errors import InvalidArgumentError


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        lat, lon = self.latitude, self.longitude
        if not (math.isfinite(lat) and math.isfinite(lon)):
            return False
        return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def validate_coordinate(coordinate: Coordinate, *, label: str = "coordinate") -> Coordinate:
    """Return the coordinate unchanged, raising InvalidArgumentError if it is malformed."""

    try:
        valid = coordinate.is_valid()
    except TypeError:
        valid = False
    if not valid:
        raise InvalidArgumentError(
            f"Invalid {label}: ({coordinate.latitude}, {coordinate.longitude}). "
            "Latitude must be within [-90, 90] and longitude within [-180, 180]."
        )
    return coordinate


@dataclass(frozen=True, slots=True)
class ServiceBranch:
    """Represents a regional service depot with fixed coordinates."""

    code: str
    name: str
    address: str
    market: str
    location: Coordinate


@dataclass(frozen=True, slots=True)
class CandidateProperty:
    """A previously imported serviced property considered for route density."""

    property_id: str
    name: str
    location: Coordinate
    branch: str
    active: bool = True
    address: Optional[str] = None
    uploaded_at: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ProximityQuery:
    """Origin, branch and radius for a route density lookup."""

    origin: Coordinate
    branch: str
    radius_miles: float = 1.0

    def __post_init__(self) -> None:
        validate_coordinate(self.origin, label="origin")
        if not isinstance(self.branch, str) or not self.branch.strip():
            raise InvalidArgumentError("Branch identifier is required.")
        radius = self.radius_miles
        if isinstance(radius, bool) or not isinstance(radius, (int, float)) or not math.isfinite(radius) or radius <= 0:
            raise InvalidArgumentError(f"Radius must be a positive number of miles, got {radius!r}.")


@dataclass(frozen=True, slots=True)
class NearbyProperty:
    property: CandidateProperty
    distance_miles: float


@dataclass(frozen=True, slots=True)
class ProximityResult:
    """Same-branch properties within the radius and the discount tier they earn."""

    nearby: tuple[NearbyProperty, ...]
    factor: float
    description: str
    count: int
    radius_miles: float
    summary: str


@dataclass(slots=True)
class DriveTimeEstimate:
    """Baseline and density-adjusted drive time from a branch to a property."""

    branch: ServiceBranch
    origin: Coordinate
    formatted_address: Optional[str]
    baseline_hours: float
    adjusted_hours: float
    proximity: Optional[ProximityResult] = None
    proximity_applied: bool = False


@dataclass(slots=True)
class ImportSummary:
    """Outcome of a bulk active-property import."""

    imported: int
    failed: int
    skipped: int
    total: int
    failed_rows: list[dict] = field(default_factory=list)
    message: str = ""
