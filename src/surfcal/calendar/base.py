"""Calendar source abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod

from surfcal.models.calendar import BusyInterval


class CalendarError(Exception):
    """Raised when busy intervals cannot be fetched."""

    def __init__(
        self,
        message: str,
        calendar_id: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.calendar_id = calendar_id
        self.status_code = status_code


class CalendarSource(ABC):
    """Anything that can report when a set of calendars is busy."""

    @abstractmethod
    async def get_busy_intervals(self, calendar_ids: list[str]) -> list[BusyInterval]:
        """Get busy intervals across all given calendars.

        Raises:
            CalendarError: If any calendar cannot be read
        """
