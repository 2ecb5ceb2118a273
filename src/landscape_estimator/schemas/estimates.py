"""Drive-time estimate schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .maps import BranchModel, LocationModel
from .proximity import ProximityResponse


class DriveTimeRequest(BaseModel):
    address: str = Field(..., min_length=1)
    branch: str = Field(..., min_length=1)
    radius_miles: Optional[float] = Field(default=None, gt=0)


class DriveTimeResponse(BaseModel):
    branch: BranchModel
    property_location: LocationModel
    formatted_address: Optional[str] = None
    baseline_hours: float
    adjusted_hours: float
    proximity_applied: bool
    proximity: Optional[ProximityResponse] = None
