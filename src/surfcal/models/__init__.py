"""Domain models for surfcal."""

from surfcal.models.calendar import BusyInterval, FreeInterval, TimeInterval
from surfcal.models.forecast import (
    DaylightWindow,
    RatingInfo,
    RatingSample,
    WaveRange,
    WaveSample,
)
from surfcal.models.spot import Coordinates, SpotInfo, SpotSearchResult
from surfcal.models.surf import (
    DEFAULT_CRITERIA,
    AcceptanceCriteria,
    Rating,
    SurfableHour,
)

__all__ = [
    # Surf
    "Rating",
    "AcceptanceCriteria",
    "DEFAULT_CRITERIA",
    "SurfableHour",
    # Forecast samples
    "RatingInfo",
    "RatingSample",
    "WaveRange",
    "WaveSample",
    "DaylightWindow",
    # Spots
    "Coordinates",
    "SpotInfo",
    "SpotSearchResult",
    # Calendar
    "TimeInterval",
    "BusyInterval",
    "FreeInterval",
]
