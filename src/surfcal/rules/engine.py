"""Rule engine for finding surfable hours.

For each spot the engine fetches three forecast series (ratings, wave,
daylight) and joins them hour by hour on timestamp. An hour is surfable when:

1. It starts inside the horizon [now, now + days)
2. A wave sample exists with the same timestamp
3. A daylight window exists for the hour's local day
4. The wave height meets the minimum
5. The rating meets the minimum
6. The whole hour falls between sunrise and sunset

Hours missing a wave sample or daylight window, or carrying a rating outside
the scale, are dropped rather than reported as errors. Source failures
propagate to the caller.
"""

from __future__ import annotations

import asyncio
import logging
import time

from surfcal.models.forecast import DaylightWindow, RatingSample, WaveSample
from surfcal.models.surf import (
    DAY_SECONDS,
    DEFAULT_CRITERIA,
    AcceptanceCriteria,
    SurfableHour,
)
from surfcal.providers.base import ForecastSource
from surfcal.rules.conditions import (
    find_daylight_window,
    is_minimum_rating,
    is_minimum_wave_height,
    is_within_daylight,
)

logger = logging.getLogger(__name__)


async def fetch_spot_series(
    source: ForecastSource, spot_id: str, days: int
) -> tuple[list[RatingSample], list[WaveSample], list[DaylightWindow]]:
    """Fetch the three series for a spot concurrently."""
    ratings, wave, daylight = await asyncio.gather(
        source.get_ratings(spot_id, days, 1),
        source.get_wave(spot_id, days, 1),
        source.get_daylight(spot_id, days),
    )
    return ratings, wave, daylight


def evaluate_spot(
    spot_id: str,
    ratings: list[RatingSample],
    wave: list[WaveSample],
    daylight: list[DaylightWindow],
    now: float,
    days: int,
    criteria: AcceptanceCriteria = DEFAULT_CRITERIA,
) -> list[SurfableHour]:
    """Reduce one spot's series to its surfable hours.

    Args:
        spot_id: Spot the series belong to
        ratings: Hourly ratings, output follows their order
        wave: Hourly wave samples
        daylight: Daily sunrise/sunset windows
        now: Reference time (Unix seconds), earlier hours are skipped
        days: Horizon length in days, measured from `now`
        criteria: Minimum wave height and rating

    Returns:
        Surfable hours in rating order
    """
    horizon_end = now + days * DAY_SECONDS
    wave_by_time = {}
    for sample in wave:
        wave_by_time.setdefault(sample.timestamp, sample)

    hours: list[SurfableHour] = []
    for sample in ratings:
        timestamp = sample.timestamp
        if timestamp < now or timestamp >= horizon_end:
            continue

        if not sample.rating.is_known:
            logger.debug(
                f"Spot {spot_id}: unknown rating {sample.rating.key!r} at {timestamp}, skipping"
            )
            continue

        wave_sample = wave_by_time.get(timestamp)
        if wave_sample is None:
            logger.debug(f"Spot {spot_id}: no wave data at {timestamp}, skipping")
            continue

        window = find_daylight_window(timestamp, daylight)
        if window is None:
            logger.debug(f"Spot {spot_id}: no daylight window at {timestamp}, skipping")
            continue

        if (
            is_minimum_wave_height(wave_sample.surf, criteria.min_wave_height)
            and is_minimum_rating(sample.rating.key, criteria.min_rating)
            and is_within_daylight(timestamp, window)
        ):
            hours.append(
                SurfableHour.starting_at(
                    timestamp,
                    spot_id=spot_id,
                    condition=sample.rating.key,
                    wave_height=wave_sample.surf.max,
                )
            )

    return hours


async def get_surfable_hours(
    spot_ids: list[str],
    source: ForecastSource,
    days: int = 7,
    now: float | None = None,
    criteria: AcceptanceCriteria | None = None,
) -> list[SurfableHour]:
    """Find surfable hours across several spots.

    Spots are fetched concurrently; the result lists each spot's hours in
    the order the spots were given.

    Args:
        spot_ids: Spots to evaluate (at least one)
        source: Logged-in forecast source
        days: Horizon length in days
        now: Reference time in Unix seconds (default: current time)
        criteria: Acceptance criteria (default: 2ft, POOR_TO_FAIR)

    Raises:
        ValueError: If no spots are given or days < 1
        ProviderError: If any fetch fails
    """
    if not spot_ids:
        raise ValueError("At least one spot id is required")
    if days < 1:
        raise ValueError(f"days must be at least 1, got {days}")

    now = time.time() if now is None else now
    criteria = criteria or DEFAULT_CRITERIA

    async def evaluate(spot_id: str) -> list[SurfableHour]:
        ratings, wave, daylight = await fetch_spot_series(source, spot_id, days)
        hours = evaluate_spot(spot_id, ratings, wave, daylight, now, days, criteria)
        logger.info(
            f"Spot {spot_id}: {len(hours)} surfable of {len(ratings)} forecast hours"
        )
        return hours

    per_spot = await asyncio.gather(*(evaluate(spot_id) for spot_id in spot_ids))
    return [hour for hours in per_spot for hour in hours]
