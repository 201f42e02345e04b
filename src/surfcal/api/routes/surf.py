"""Surfable hours routes."""

from __future__ import annotations

import time
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ValidationError

from surfcal.api.dependencies import get_calendar_source, get_forecast_source
from surfcal.calendar.base import CalendarError, CalendarSource
from surfcal.config import get_settings
from surfcal.models.surf import AcceptanceCriteria, Rating
from surfcal.providers.base import ForecastSource, ProviderError
from surfcal.recommendations.surfable_hours import SurfableHoursService

router = APIRouter()


class SurfableHourResponse(BaseModel):
    """A surfable hour."""

    start_time: int
    end_time: int
    start: datetime
    end: datetime
    spot_id: str
    condition: Rating
    wave_height: float
    calendar_conflict: bool | None = None


class SurfableHoursResponse(BaseModel):
    """Surfable hours for a search window."""

    spot_ids: list[str]
    days: int
    start: int
    calendars_checked: bool
    criteria: AcceptanceCriteria
    hours: list[SurfableHourResponse]


@router.get(
    "/hours",
    response_model=SurfableHoursResponse,
    response_model_exclude_none=True,
)
async def get_surfable_hours(
    spot_id: list[str] = Query(..., description="Surf spot ID (repeatable)"),
    days: int | None = Query(default=None, ge=1, le=17),
    start: int | None = Query(default=None, description="Window start (Unix seconds)"),
    calendar_id: list[str] = Query(default=[], description="Calendar ID (repeatable)"),
    wave_min: float | None = Query(default=None, ge=0),
    rating_min: str | None = Query(default=None),
    forecast_source: ForecastSource = Depends(get_forecast_source),
    calendar_source: CalendarSource | None = Depends(get_calendar_source),
) -> SurfableHoursResponse:
    """Find surfable hours, optionally checked against calendars."""
    settings = get_settings()
    defaults = settings.default_criteria()
    try:
        criteria = AcceptanceCriteria(
            min_wave_height=wave_min if wave_min is not None else defaults.min_wave_height,
            min_rating=Rating.parse(rating_min) if rating_min else defaults.min_rating,
        )
    except (ValueError, ValidationError) as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    days = days or settings.default_days
    now = start if start is not None else int(time.time())

    service = SurfableHoursService(forecast_source, calendar_source)
    try:
        hours = await service.get_surfable_hours(
            spot_id,
            days=days,
            now=now,
            calendar_ids=calendar_id or None,
            criteria=criteria,
        )
    except (ProviderError, CalendarError) as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Upstream request failed: {e}",
        )

    return SurfableHoursResponse(
        spot_ids=spot_id,
        days=days,
        start=int(now),
        calendars_checked=bool(calendar_id) and calendar_source is not None,
        criteria=criteria,
        hours=[
            SurfableHourResponse(
                **hour.model_dump(),
                start=datetime.fromtimestamp(hour.start_time).astimezone(),
                end=datetime.fromtimestamp(hour.end_time).astimezone(),
            )
            for hour in hours
        ],
    )
