"""Google Calendar API client.

Reads events from one or more calendars and reports them as busy intervals.

## API Documentation

https://developers.google.com/calendar/api/v3/reference/events/list

## Authentication

Either an API key (works for public calendars) or an OAuth access token.

## Event Filtering

- Recurring events are expanded (`singleEvents=True`)
- All-day events (`date` instead of `dateTime`) are ignored
- Cancelled events are ignored
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Iterator

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from surfcal.calendar.base import CalendarError, CalendarSource
from surfcal.models.calendar import BusyInterval

logger = logging.getLogger(__name__)


def _parse_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def event_to_busy_interval(event: dict[str, Any]) -> BusyInterval | None:
    """Convert an API event to a busy interval.

    Returns None for all-day and cancelled events.
    """
    if event.get("status") == "cancelled":
        return None

    start = (event.get("start") or {}).get("dateTime")
    end = (event.get("end") or {}).get("dateTime")
    if not start or not end:
        return None

    return BusyInterval(start=_parse_datetime(start), end=_parse_datetime(end))


class GoogleCalendarClient(CalendarSource):
    """Busy intervals from Google Calendar.

    The discovery client is blocking, so `get_busy_intervals` runs the
    requests in a worker thread:

    ```python
    calendar = GoogleCalendarClient(api_key="...")
    busy = await calendar.get_busy_intervals(["me@example.com"])
    ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        access_token: str | None = None,
        lookahead_days: int = 7,
        service: Any = None,
    ):
        """
        Args:
            api_key: Google API key (public calendars)
            access_token: OAuth access token, used when no API key is given
            lookahead_days: Days of events to read, starting now
            service: Ready-made `calendar` v3 service; skips building one
        """
        self.lookahead_days = lookahead_days
        if service is None:
            service = self._build_service(api_key, access_token)
        self._service = service

    @staticmethod
    def _build_service(api_key: str | None, access_token: str | None) -> Any:
        if api_key:
            return build("calendar", "v3", developerKey=api_key, cache_discovery=False)
        if access_token:
            return build(
                "calendar",
                "v3",
                credentials=Credentials(token=access_token),
                cache_discovery=False,
            )
        raise ValueError("An API key or access token is required")

    def iter_events(
        self,
        calendar_id: str,
        time_min: datetime,
        time_max: datetime,
        page_size: int = 250,
    ) -> Iterator[dict[str, Any]]:
        """Yield raw events from one calendar, one API page at a time.

        Raises:
            CalendarError: If the API rejects the request
        """
        page_token: str | None = None
        while True:
            request = self._service.events().list(
                calendarId=calendar_id,
                timeMin=time_min.isoformat(),
                timeMax=time_max.isoformat(),
                maxResults=page_size,
                singleEvents=True,
                orderBy="startTime",
                pageToken=page_token,
            )
            try:
                page = request.execute()
            except HttpError as e:
                logger.error(f"Calendar {calendar_id} could not be read: {e}")
                raise CalendarError(
                    f"Failed to fetch events for calendar {calendar_id}",
                    calendar_id=calendar_id,
                    status_code=e.resp.status,
                ) from e

            yield from page.get("items", [])

            page_token = page.get("nextPageToken")
            if page_token is None:
                return

    def busy_intervals(
        self, calendar_ids: list[str], now: datetime | None = None
    ) -> list[BusyInterval]:
        """Blocking version of `get_busy_intervals`."""
        start = now or datetime.now(timezone.utc)
        end = start + timedelta(days=self.lookahead_days)

        busy: list[BusyInterval] = []
        for calendar_id in calendar_ids:
            events = list(self.iter_events(calendar_id, start, end))
            busy.extend(
                interval
                for interval in map(event_to_busy_interval, events)
                if interval is not None
            )
            logger.debug(f"Calendar {calendar_id}: {len(events)} events")
        return busy

    async def get_busy_intervals(self, calendar_ids: list[str]) -> list[BusyInterval]:
        return await asyncio.to_thread(self.busy_intervals, calendar_ids)
