"""In-memory calendar source for tests."""

from __future__ import annotations

from surfcal.calendar.base import CalendarSource
from surfcal.models.calendar import BusyInterval


class FakeCalendarSource(CalendarSource):
    """Returns the configured busy intervals for any calendar ids."""

    def __init__(
        self,
        busy: list[BusyInterval] | None = None,
        error: Exception | None = None,
    ):
        self.busy = list(busy or [])
        self.error = error
        self.requested: list[list[str]] = []

    async def get_busy_intervals(self, calendar_ids: list[str]) -> list[BusyInterval]:
        self.requested.append(list(calendar_ids))
        if self.error is not None:
            raise self.error
        return list(self.busy)
