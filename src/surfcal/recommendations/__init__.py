"""Surfable hour recommendations."""

from surfcal.recommendations.surfable_hours import (
    SpotNameCache,
    SurfableHoursService,
    group_by_day,
    group_by_spot,
)

__all__ = [
    "SurfableHoursService",
    "SpotNameCache",
    "group_by_spot",
    "group_by_day",
]
