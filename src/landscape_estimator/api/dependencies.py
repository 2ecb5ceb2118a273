"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import HTTPException, status

from ..errors import UpstreamUnavailableError
from ..services.maps import GoogleMapsClient


def get_maps_client() -> GoogleMapsClient:
    """Build a maps client per request; routes never share a module-level client."""
    try:
        return GoogleMapsClient()
    except UpstreamUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
