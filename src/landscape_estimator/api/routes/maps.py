"""Mapping endpoints: geocoding and closest-branch suggestions."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import UpstreamUnavailableError
from ...schemas.maps import (
    AddressRequest,
    BranchModel,
    ClosestBranchResponse,
    GeocodeResponse,
    LocationModel,
)
from ...services.estimates import suggest_branch
from ...services.maps import GoogleMapsClient
from ..dependencies import get_maps_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/maps", tags=["maps"])


@router.post("/geocode", response_model=GeocodeResponse, status_code=status.HTTP_200_OK)
def geocode(payload: AddressRequest, maps: GoogleMapsClient = Depends(get_maps_client)) -> GeocodeResponse:
    try:
        result = maps.geocode(payload.address)
    except UpstreamUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Address not found")
    return GeocodeResponse(
        location=LocationModel.from_domain(result.location),
        formatted_address=result.formatted_address,
    )


@router.post("/closest-branch", response_model=ClosestBranchResponse, status_code=status.HTTP_200_OK)
def closest_branch(payload: AddressRequest, maps: GoogleMapsClient = Depends(get_maps_client)) -> ClosestBranchResponse:
    try:
        geocoded, match = suggest_branch(payload.address, maps=maps)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except UpstreamUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return ClosestBranchResponse(
        closest_branch=BranchModel.from_domain(match.branch),
        duration_hours=match.duration_hours,
        distance_meters=match.distance_meters,
        property_location=LocationModel.from_domain(geocoded.location),
        formatted_address=geocoded.formatted_address,
    )
