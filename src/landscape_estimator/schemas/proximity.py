"""Route density request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import CandidateProperty, NearbyProperty, ProximityResult


class ActivePropertyModel(BaseModel):
    id: str
    name: str
    address: Optional[str] = None
    lat: float
    lng: float
    branch: str
    is_active: bool
    uploaded_at: Optional[str] = None

    @classmethod
    def from_domain(cls, prop: CandidateProperty) -> "ActivePropertyModel":
        return cls(
            id=prop.property_id,
            name=prop.name,
            address=prop.address,
            lat=prop.location.latitude,
            lng=prop.location.longitude,
            branch=prop.branch,
            is_active=prop.active,
            uploaded_at=prop.uploaded_at,
        )


class NearbyPropertyModel(ActivePropertyModel):
    distance: float

    @classmethod
    def from_nearby(cls, item: NearbyProperty) -> "NearbyPropertyModel":
        base = ActivePropertyModel.from_domain(item.property)
        return cls(**base.model_dump(), distance=item.distance_miles)


class ProximityRequest(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    branch: str = Field(..., min_length=1)
    radius_miles: float = Field(default=1.0, gt=0)


class ProximityResponse(BaseModel):
    nearby_properties: List[NearbyPropertyModel]
    proximity_factor: float
    description: str
    summary: str
    count: int
    radius_miles: float

    @classmethod
    def from_result(cls, result: ProximityResult) -> "ProximityResponse":
        return cls(
            nearby_properties=[NearbyPropertyModel.from_nearby(item) for item in result.nearby],
            proximity_factor=result.factor,
            description=result.description,
            summary=result.summary,
            count=result.count,
            radius_miles=result.radius_miles,
        )


class ActivePropertiesResponse(BaseModel):
    properties: List[ActivePropertyModel]
    total: int


class FailedImportRow(BaseModel):
    name: str
    address: str
    reason: str


class ImportResponse(BaseModel):
    success: bool = True
    imported: int
    failed: int
    skipped: int
    total: int
    failed_properties: List[FailedImportRow]
    message: str
