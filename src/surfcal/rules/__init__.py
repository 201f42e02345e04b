"""Rules for deciding which forecast hours are surfable."""

from surfcal.rules.availability import conflicts_with_busy_intervals, mark_conflicts
from surfcal.rules.conditions import (
    find_daylight_window,
    is_minimum_rating,
    is_minimum_wave_height,
    is_within_daylight,
)
from surfcal.rules.engine import evaluate_spot, get_surfable_hours

__all__ = [
    "get_surfable_hours",
    "evaluate_spot",
    "mark_conflicts",
    "conflicts_with_busy_intervals",
    "find_daylight_window",
    "is_minimum_rating",
    "is_minimum_wave_height",
    "is_within_daylight",
]
