"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and active-property table status."""
    from ...data.properties_repository import count_active_properties
    from ...db.supabase import get_supabase_client

    if not get_supabase_client():
        return {
            "configured": False,
            "message": "Supabase not configured. Set LSE_SUPABASE_URL and LSE_SUPABASE_KEY environment variables.",
            "active_properties": 0,
        }

    try:
        count = count_active_properties()
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
    return {
        "configured": True,
        "connected": True,
        "active_properties": count,
        "message": f"Database connected. Found {count} active properties.",
    }
