"""Pytest fixtures for surfcal tests.

Forecast and calendar sources are in-memory fakes, so nothing here talks to
Surfline or Google. Series helpers build samples around T0, an hour boundary
on 2023-01-01, with a daylight window that covers it.
"""

import asyncio
import os

import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("SURFLINE_EMAIL", "test@example.com")
os.environ.setdefault("SURFLINE_PASSWORD", "test-password")
os.environ.pop("GOOGLE_CALENDAR_API_KEY", None)

from surfcal.calendar.fake import FakeCalendarSource
from surfcal.models.forecast import DaylightWindow, RatingSample, WaveSample
from surfcal.models.surf import Rating
from surfcal.providers.fake import FakeForecastSource

# 2023-01-01 08:00 UTC, an hour boundary
T0 = 1672560000
# 2023-01-01 00:00 UTC
MIDNIGHT = 1672531200
HOUR = 3600
DAY = 86400


def make_rating(timestamp: int, key: Rating | str = Rating.GOOD) -> RatingSample:
    return RatingSample.model_validate(
        {"timestamp": timestamp, "utcOffset": 0, "rating": {"key": key, "value": 3}}
    )


def make_wave(timestamp: int, max_height: float = 3.0, min_height: float = 2.0) -> WaveSample:
    return WaveSample.model_validate(
        {
            "timestamp": timestamp,
            "utcOffset": 0,
            "surf": {"min": min_height, "max": max_height},
        }
    )


def make_daylight(
    midnight: int = MIDNIGHT,
    sunrise: int = T0 - 2 * HOUR,
    sunset: int = T0 + 9 * HOUR,
    sunset_utc_offset: float = 0,
) -> DaylightWindow:
    return DaylightWindow.model_validate(
        {
            "midnight": midnight,
            "sunrise": sunrise,
            "sunset": sunset,
            "sunsetUTCOffset": sunset_utc_offset,
        }
    )


def run(coro):
    """Run a coroutine to completion."""
    return asyncio.run(coro)


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from surfcal.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Source Fixtures
# =============================================================================


@pytest.fixture
def forecast_source() -> FakeForecastSource:
    """Logged-in fake source with one GOOD, 3ft hour at T0 in daylight."""
    return FakeForecastSource(
        ratings=[make_rating(T0, Rating.GOOD)],
        wave=[make_wave(T0, 3.0)],
        daylight=[make_daylight()],
        logged_in=True,
    )


@pytest.fixture
def two_hour_source() -> FakeForecastSource:
    """Logged-in fake source with qualifying hours at T0 and T0 + 1h."""
    return FakeForecastSource(
        ratings=[make_rating(T0, Rating.GOOD), make_rating(T0 + HOUR, Rating.FAIR)],
        wave=[make_wave(T0, 3.0), make_wave(T0 + HOUR, 4.0)],
        daylight=[make_daylight()],
        logged_in=True,
    )


@pytest.fixture
def empty_calendar() -> FakeCalendarSource:
    return FakeCalendarSource()
