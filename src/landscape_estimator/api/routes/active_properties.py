"""Active-property endpoints: listing, bulk import and route density."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from ...data.branches import get_branch
from ...data.properties_repository import list_active_properties, replace_active_properties
from ...errors import UpstreamUnavailableError
from ...models.domain import Coordinate
from ...schemas.proximity import (
    ActivePropertiesResponse,
    ActivePropertyModel,
    FailedImportRow,
    ImportResponse,
    ProximityRequest,
    ProximityResponse,
)
from ...services.imports import import_active_properties
from ...services.maps import GoogleMapsClient
from ...services.proximity import compute_proximity
from ..dependencies import get_maps_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/active-properties", tags=["active-properties"])


@router.get("", response_model=ActivePropertiesResponse, status_code=status.HTTP_200_OK)
def get_active_properties(branch: str | None = Query(default=None, description="Optional branch filter")) -> ActivePropertiesResponse:
    try:
        properties = list_active_properties(branch)
    except UpstreamUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return ActivePropertiesResponse(
        properties=[ActivePropertyModel.from_domain(prop) for prop in properties],
        total=len(properties),
    )


@router.post("/import", response_model=ImportResponse, status_code=status.HTTP_201_CREATED)
async def import_properties(
    file: UploadFile = File(...),
    maps: GoogleMapsClient = Depends(get_maps_client),
) -> ImportResponse:
    """Replace the active-property set with the contents of a CSV or Excel upload."""
    if not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")

    content = await file.read()
    try:
        # geocoding is paced with blocking sleeps, keep it off the event loop
        summary = await run_in_threadpool(
            import_active_properties,
            content,
            file.filename,
            geocoder=maps,
            store=replace_active_properties,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UpstreamUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Import error: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to import properties: {exc}",
        ) from exc

    return ImportResponse(
        imported=summary.imported,
        failed=summary.failed,
        skipped=summary.skipped,
        total=summary.total,
        failed_properties=[FailedImportRow(**row) for row in summary.failed_rows],
        message=summary.message,
    )


@router.post("/proximity", response_model=ProximityResponse, status_code=status.HTTP_200_OK)
def calculate_proximity(payload: ProximityRequest) -> ProximityResponse:
    logger.info(
        "Proximity calculation request: lat=%s lng=%s branch=%s radius=%s",
        payload.lat,
        payload.lng,
        payload.branch,
        payload.radius_miles,
    )
    try:
        branch = get_branch(payload.branch).code
        candidates = list_active_properties(branch)
        result = compute_proximity(
            Coordinate(payload.lat, payload.lng),
            branch,
            payload.radius_miles,
            candidates,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UpstreamUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Proximity calculation error: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to calculate proximity: {exc}",
        ) from exc
    return ProximityResponse.from_result(result)
