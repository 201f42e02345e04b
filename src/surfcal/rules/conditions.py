"""Per-hour acceptance tests.

Each function checks one criterion for a single forecast hour. The rule
engine combines them; an hour is surfable only if every check passes.
"""

from __future__ import annotations

from surfcal.models.forecast import DaylightWindow, WaveRange
from surfcal.models.surf import DAY_SECONDS, HOUR_SECONDS, Rating


def is_minimum_rating(rating: Rating, min_rating: Rating) -> bool:
    """Check that a rating is at least `min_rating` on the rating scale."""
    return rating.rank >= min_rating.rank


def is_minimum_wave_height(wave: WaveRange, min_height: float) -> bool:
    """Check the maximum wave height against an inclusive lower bound."""
    return wave.max >= min_height


def find_daylight_window(
    timestamp: int, windows: list[DaylightWindow]
) -> DaylightWindow | None:
    """Find the daylight window for the local day containing `timestamp`.

    A window covers [midnight, midnight + 24h).
    """
    for window in windows:
        if window.midnight <= timestamp < window.midnight + DAY_SECONDS:
            return window
    return None


def is_within_daylight(timestamp: int, window: DaylightWindow) -> bool:
    """Check that the hour starting at `timestamp` fits inside daylight.

    Sunset is shifted by the window's sunset UTC offset; sunrise is used as
    given. An hour ending exactly at sunset passes.
    """
    sunrise = window.sunrise
    sunset = window.sunset + window.sunset_utc_offset * HOUR_SECONDS
    return timestamp >= sunrise and timestamp + HOUR_SECONDS <= sunset
