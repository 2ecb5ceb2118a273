"""Route density discount engine."""

from .adjustment import adjust_drive_time
from .classifier import classify, compute_proximity, find_nearby
from .tiers import PROXIMITY_TIERS, ProximityTier, tier_for_count

__all__ = [
    "adjust_drive_time",
    "classify",
    "compute_proximity",
    "find_nearby",
    "PROXIMITY_TIERS",
    "ProximityTier",
    "tier_for_count",
]
