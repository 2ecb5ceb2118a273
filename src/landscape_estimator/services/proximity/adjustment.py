"""Drive-time adjustment for route density."""

from __future__ import annotations

import math

from ...errors import InvalidArgumentError
from ...models.domain import ProximityResult


def adjust_drive_time(baseline_hours: float, result: ProximityResult) -> float:
    """Scale an isolated drive time by the proximity factor, rounded to 0.1 h."""

    if isinstance(baseline_hours, bool) or not isinstance(baseline_hours, (int, float)):
        raise InvalidArgumentError(f"Baseline drive time must be a number, got {baseline_hours!r}.")
    if not math.isfinite(baseline_hours) or baseline_hours < 0:
        raise InvalidArgumentError(f"Baseline drive time must be a non-negative number of hours, got {baseline_hours}.")
    adjusted = round(baseline_hours * result.factor, 1)
    # Rounding up to the tenth can overshoot a baseline that is not itself a tenth.
    return min(adjusted, baseline_hours)
