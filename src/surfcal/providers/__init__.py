"""Forecast sources."""

from surfcal.providers.base import (
    AuthenticationError,
    ForecastSource,
    NotLoggedInError,
    ProviderError,
    RateLimitError,
)
from surfcal.providers.fake import FakeForecastSource
from surfcal.providers.surfline import POPULAR_SPOTS, SurflineProvider

__all__ = [
    "ForecastSource",
    "ProviderError",
    "RateLimitError",
    "AuthenticationError",
    "NotLoggedInError",
    "SurflineProvider",
    "FakeForecastSource",
    "POPULAR_SPOTS",
]
