"""Route density tiers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProximityTier:
    min_count: int
    factor: float
    description: str


# Ordered from densest to isolated; the first tier whose min_count is met wins.
PROXIMITY_TIERS: tuple[ProximityTier, ...] = (
    ProximityTier(min_count=10, factor=0.25, description="Dense route"),
    ProximityTier(min_count=5, factor=0.50, description="Good route density"),
    ProximityTier(min_count=3, factor=0.70, description="Moderate route"),
    ProximityTier(min_count=1, factor=0.85, description="Light route"),
    ProximityTier(min_count=0, factor=1.00, description="Isolated property"),
)


def tier_for_count(count: int) -> ProximityTier:
    if count < 0:
        raise ValueError(f"Property count cannot be negative: {count}")
    for tier in PROXIMITY_TIERS:
        if count >= tier.min_count:
            return tier
    return PROXIMITY_TIERS[-1]


def describe_tier(tier: ProximityTier, count: int, radius_miles: float) -> str:
    """Human-readable summary, e.g. ``Light route - 1 property within 1 mile``."""

    if count == 0:
        return tier.description
    noun = "property" if count == 1 else "properties"
    radius_label = f"{radius_miles:g}"
    unit = "mile" if radius_miles <= 1 else "miles"
    return f"{tier.description} - {count} {noun} within {radius_label} {unit}"
