"""Calendar conflict marking for surfable hours."""

from __future__ import annotations

from datetime import datetime, timezone

from surfcal.models.calendar import BusyInterval
from surfcal.models.surf import SurfableHour


def conflicts_with_busy_intervals(
    hour: SurfableHour, busy: list[BusyInterval]
) -> bool:
    """Check whether any busy interval overlaps the hour.

    Intervals are half-open: a busy slot starting exactly when the hour
    ends (or ending exactly when it starts) is not a conflict. A slot whose
    start is not before its end covers no time and never conflicts.
    """
    start = datetime.fromtimestamp(hour.start_time, tz=timezone.utc)
    end = datetime.fromtimestamp(hour.end_time, tz=timezone.utc)
    return any(
        slot.start < slot.end and start < slot.end and slot.start < end
        for slot in busy
    )


def mark_conflicts(
    hours: list[SurfableHour], busy: list[BusyInterval]
) -> list[SurfableHour]:
    """Annotate each hour with whether it clashes with the calendar.

    Returns new objects in the same order; nothing is filtered out.
    """
    return [hour.with_conflict(conflicts_with_busy_intervals(hour, busy)) for hour in hours]
