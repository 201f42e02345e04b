"""Calendar integration module.

Provides the busy intervals that surfable hours are checked against.

## Sources

1. **GoogleCalendarClient**: reads timed events from Google Calendar
2. **FakeCalendarSource**: fixed busy list, for tests

## Free Slots

`find_free_slots` turns busy intervals into free intervals of at least two
hours. It is not needed for conflict marking, which works on busy intervals
directly.
"""

from surfcal.calendar.base import CalendarError, CalendarSource
from surfcal.calendar.fake import FakeCalendarSource
from surfcal.calendar.free_slots import find_free_slots
from surfcal.calendar.google_calendar import GoogleCalendarClient

__all__ = [
    "CalendarSource",
    "CalendarError",
    "GoogleCalendarClient",
    "FakeCalendarSource",
    "find_free_slots",
]
