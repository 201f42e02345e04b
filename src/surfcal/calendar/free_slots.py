"""Free slot finder.

Computes the gaps between busy intervals inside a search window. Gaps shorter
than a minimum duration are dropped.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from surfcal.models.calendar import BusyInterval, FreeInterval

MIN_FREE_DURATION = timedelta(hours=2)


def find_free_slots(
    busy: list[BusyInterval],
    now: datetime,
    days_into_future: int,
    min_duration: timedelta = MIN_FREE_DURATION,
) -> list[FreeInterval]:
    """Find free intervals between `now` and `now + days_into_future`.

    Args:
        busy: Busy intervals in any order (not modified)
        now: Start of the search window
        days_into_future: Length of the search window in days
        min_duration: Shortest gap worth reporting

    Returns:
        Free intervals in chronological order
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    window_end = now + timedelta(days=days_into_future)

    free: list[FreeInterval] = []
    search_start = now

    for slot in sorted(busy, key=lambda b: b.start):
        if slot.start >= window_end:
            break
        if slot.start > search_start:
            free.append(FreeInterval(start=search_start, end=slot.start))
        if slot.end > search_start:
            search_start = slot.end

    if search_start < window_end:
        free.append(FreeInterval(start=search_start, end=window_end))

    return [slot for slot in free if slot.duration >= min_duration]
