"""Surfable hours with optional calendar filtering.

Combines the rule engine with a calendar source:

1. Find surfable hours for the requested spots
2. If calendars were requested and a calendar source is configured, fetch
   busy intervals and mark each hour with a conflict flag

Without calendars the hours are returned untouched, so their conflict flag
stays unset rather than False.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime

from surfcal.calendar.base import CalendarSource
from surfcal.models.surf import AcceptanceCriteria, SurfableHour
from surfcal.providers.base import ForecastSource, ProviderError
from surfcal.rules.availability import mark_conflicts
from surfcal.rules.engine import get_surfable_hours

logger = logging.getLogger(__name__)


class SurfableHoursService:
    """Finds surfable hours and checks them against calendars.

    Example:
        ```python
        service = SurfableHoursService(surfline, GoogleCalendarClient(api_key=key))
        hours = await service.get_surfable_hours(
            ["5842041f4e65fad6a7708876"],
            days=7,
            now=time.time(),
            calendar_ids=["me@example.com"],
        )
        ```
    """

    def __init__(
        self,
        forecast_source: ForecastSource,
        calendar_source: CalendarSource | None = None,
    ):
        self.forecast_source = forecast_source
        self.calendar_source = calendar_source

    async def get_surfable_hours(
        self,
        spot_ids: list[str],
        days: int = 7,
        now: float | None = None,
        calendar_ids: list[str] | None = None,
        criteria: AcceptanceCriteria | None = None,
    ) -> list[SurfableHour]:
        """Get surfable hours, marking calendar conflicts when requested.

        Raises:
            ProviderError: If the forecast cannot be fetched
            CalendarError: If the calendars cannot be read
        """
        hours = await get_surfable_hours(
            spot_ids, self.forecast_source, days=days, now=now, criteria=criteria
        )

        if self.calendar_source is None or not calendar_ids:
            return hours

        busy = await self.calendar_source.get_busy_intervals(calendar_ids)
        logger.info(
            f"Checking {len(hours)} surfable hours against {len(busy)} busy intervals"
        )
        return mark_conflicts(hours, busy)


class SpotNameCache:
    """Memo of spot names keyed by spot id.

    Clear it at the start of each top-level invocation.
    """

    def __init__(self, source: ForecastSource):
        self.source = source
        self._names: dict[str, str] = {}

    def clear(self) -> None:
        self._names.clear()

    def __contains__(self, spot_id: str) -> bool:
        return spot_id in self._names

    async def get_name(self, spot_id: str) -> str:
        """Get a spot's name, falling back to its id if the lookup fails."""
        if spot_id in self._names:
            return self._names[spot_id]

        try:
            info = await self.source.get_spot_info(spot_id)
        except ProviderError as e:
            logger.warning(
                f"Could not fetch name for spot {spot_id}, using ID instead: {e}"
            )
            return spot_id

        self._names[spot_id] = info.name
        return info.name

    async def display(self, spot_id: str) -> str:
        """Render a spot as 'Name (id)', or just the id if no name is known."""
        name = await self.get_name(spot_id)
        return spot_id if name == spot_id else f"{name} ({spot_id})"


def group_by_spot(hours: list[SurfableHour]) -> dict[str, list[SurfableHour]]:
    """Group hours by spot, keeping first-seen spot order."""
    grouped: dict[str, list[SurfableHour]] = defaultdict(list)
    for hour in hours:
        grouped[hour.spot_id].append(hour)
    return dict(grouped)


def group_by_day(hours: list[SurfableHour]) -> dict[str, list[SurfableHour]]:
    """Group hours by local calendar day (ISO date), in chronological order."""
    grouped: dict[str, list[SurfableHour]] = defaultdict(list)
    for hour in sorted(hours, key=lambda h: h.start_time):
        day = datetime.fromtimestamp(hour.start_time).date().isoformat()
        grouped[day].append(hour)
    return dict(grouped)
