"""Mapping provider integration."""

from .google_client import BranchMatch, GeocodeResult, GoogleMapsClient

__all__ = ["BranchMatch", "GeocodeResult", "GoogleMapsClient"]
