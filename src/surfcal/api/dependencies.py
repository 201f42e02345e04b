"""FastAPI dependencies for forecast and calendar sources.

The sources are created once per application and stored on `app.state`.
Tests replace them with `app.dependency_overrides`.
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from surfcal.calendar.base import CalendarSource
from surfcal.providers.base import ForecastSource


def get_forecast_source(request: Request) -> ForecastSource:
    """Get the logged-in forecast source."""
    source = getattr(request.app.state, "forecast_source", None)
    if source is None:
        error = getattr(request.app.state, "forecast_error", None)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Forecast source unavailable: {error or 'not configured'}",
        )
    return source


def get_calendar_source(request: Request) -> CalendarSource | None:
    """Get the calendar source, or None if calendars are not configured."""
    return getattr(request.app.state, "calendar_source", None)
