"""Mapping request/response schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..models.domain import Coordinate, ServiceBranch


class AddressRequest(BaseModel):
    address: str = Field(..., min_length=1)


class LocationModel(BaseModel):
    lat: float
    lng: float

    @classmethod
    def from_domain(cls, coordinate: Coordinate) -> "LocationModel":
        return cls(lat=coordinate.latitude, lng=coordinate.longitude)


class GeocodeResponse(BaseModel):
    location: LocationModel
    formatted_address: Optional[str] = None


class BranchModel(BaseModel):
    id: str
    name: str
    address: str
    market: str
    lat: float
    lng: float

    @classmethod
    def from_domain(cls, branch: ServiceBranch) -> "BranchModel":
        return cls(
            id=branch.code,
            name=branch.name,
            address=branch.address,
            market=branch.market,
            lat=branch.location.latitude,
            lng=branch.location.longitude,
        )


class ClosestBranchResponse(BaseModel):
    closest_branch: BranchModel
    duration_hours: float
    distance_meters: float
    property_location: LocationModel
    formatted_address: Optional[str] = None
