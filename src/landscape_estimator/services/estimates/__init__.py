"""Drive-time estimate services."""

from .service import estimate_drive_time, suggest_branch

__all__ = ["estimate_drive_time", "suggest_branch"]
