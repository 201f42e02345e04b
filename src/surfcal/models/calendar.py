"""Calendar interval models."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, field_validator


class TimeInterval(BaseModel):
    """A span of absolute time.

    Naive datetimes are interpreted as UTC so that intervals can always be
    compared with each other.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


class BusyInterval(TimeInterval):
    """A period blocked in a calendar.

    `start < end` is expected but not validated here; the calendar source
    owns that check.
    """


class FreeInterval(TimeInterval):
    """A gap between busy intervals."""
