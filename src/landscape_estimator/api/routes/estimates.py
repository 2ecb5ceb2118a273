"""Drive-time estimate endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import UpstreamUnavailableError
from ...schemas.estimates import DriveTimeRequest, DriveTimeResponse
from ...schemas.maps import BranchModel, LocationModel
from ...schemas.proximity import ProximityResponse
from ...services.estimates import estimate_drive_time
from ...services.maps import GoogleMapsClient
from ..dependencies import get_maps_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/estimates", tags=["estimates"])


@router.post("/drive-time", response_model=DriveTimeResponse, status_code=status.HTTP_200_OK)
def drive_time(payload: DriveTimeRequest, maps: GoogleMapsClient = Depends(get_maps_client)) -> DriveTimeResponse:
    try:
        estimate = estimate_drive_time(
            payload.address,
            payload.branch,
            maps=maps,
            radius_miles=payload.radius_miles,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UpstreamUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Error estimating drive time: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to estimate drive time: {exc}",
        ) from exc

    return DriveTimeResponse(
        branch=BranchModel.from_domain(estimate.branch),
        property_location=LocationModel.from_domain(estimate.origin),
        formatted_address=estimate.formatted_address,
        baseline_hours=estimate.baseline_hours,
        adjusted_hours=estimate.adjusted_hours,
        proximity_applied=estimate.proximity_applied,
        proximity=ProximityResponse.from_result(estimate.proximity) if estimate.proximity else None,
    )
