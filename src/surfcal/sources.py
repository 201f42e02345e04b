"""Construction of forecast and calendar sources from settings."""

from __future__ import annotations

import logging

from surfcal.calendar.base import CalendarSource
from surfcal.calendar.google_calendar import GoogleCalendarClient
from surfcal.config import Settings
from surfcal.providers.surfline import SurflineProvider

logger = logging.getLogger(__name__)


async def connect_forecast_source(settings: Settings) -> SurflineProvider:
    """Create a Surfline provider and log it in.

    Raises:
        ConfigurationError: If credentials are missing
        AuthenticationError: If login fails
    """
    email, password = settings.require_surfline()
    provider = SurflineProvider(
        base_url=settings.surfline_base_url,
        timeout=settings.request_timeout_seconds,
        user_agent=f"{settings.app_name}/{settings.app_version}",
    )
    try:
        await provider.login(email, password)
    except Exception:
        await provider.close()
        raise
    return provider


def build_calendar_source(settings: Settings) -> CalendarSource | None:
    """Create a Google Calendar client if an API key is configured."""
    if not settings.calendar_configured:
        logger.debug("No Google Calendar API key configured")
        return None
    return GoogleCalendarClient(
        api_key=settings.google_calendar_api_key,
        lookahead_days=settings.calendar_lookahead_days,
    )
