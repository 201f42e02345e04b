"""In-memory forecast source for tests and demos."""

from __future__ import annotations

from surfcal.models.forecast import DaylightWindow, RatingSample, WaveSample
from surfcal.models.spot import Coordinates, SpotInfo, SpotSearchResult
from surfcal.providers.base import AuthenticationError, ForecastSource, NotLoggedInError
from surfcal.providers.surfline import POPULAR_SPOTS


class FakeForecastSource(ForecastSource):
    """Deterministic forecast source.

    Serves the same configured series for every spot. Every call is recorded
    in `calls` as a (method, spot_id) tuple.
    """

    name = "fake"

    def __init__(
        self,
        ratings: list[RatingSample] | None = None,
        wave: list[WaveSample] | None = None,
        daylight: list[DaylightWindow] | None = None,
        logged_in: bool = False,
    ):
        self.ratings = list(ratings or [])
        self.wave = list(wave or [])
        self.daylight = list(daylight or [])
        self.spots: dict[str, str] = dict(POPULAR_SPOTS)
        self.failures: dict[str, Exception] = {}
        self.calls: list[tuple[str, str]] = []
        self._logged_in = logged_in

    def set_ratings(self, ratings: list[RatingSample]) -> None:
        self.ratings = list(ratings)

    def set_wave(self, wave: list[WaveSample]) -> None:
        self.wave = list(wave)

    def set_daylight(self, daylight: list[DaylightWindow]) -> None:
        self.daylight = list(daylight)

    def fail_on(self, method: str, error: Exception) -> None:
        """Make `method` raise `error` on every call."""
        self.failures[method] = error

    def _record(self, method: str, spot_id: str) -> None:
        if not self._logged_in:
            raise NotLoggedInError("You must be logged in.", provider=self.name)
        self.calls.append((method, spot_id))
        if method in self.failures:
            raise self.failures[method]

    async def login(self, email: str, password: str) -> None:
        if not (email and password):
            raise AuthenticationError("Login failed.", provider=self.name)
        self._logged_in = True

    async def get_ratings(
        self, spot_id: str, days: int, interval_hours: int = 1
    ) -> list[RatingSample]:
        self._record("get_ratings", spot_id)
        return list(self.ratings)

    async def get_wave(
        self, spot_id: str, days: int, interval_hours: int = 1
    ) -> list[WaveSample]:
        self._record("get_wave", spot_id)
        return list(self.wave)

    async def get_daylight(self, spot_id: str, days: int) -> list[DaylightWindow]:
        self._record("get_daylight", spot_id)
        return list(self.daylight)

    async def get_spot_info(self, spot_id: str) -> SpotInfo:
        self._record("get_spot_info", spot_id)
        return SpotInfo(
            id=spot_id,
            name=self.spots.get(spot_id, f"Test Spot {spot_id[-4:]}"),
            coordinates=Coordinates(latitude=34.0259, longitude=-118.6919),
        )

    async def search_spots(self, query: str) -> list[SpotSearchResult]:
        self._record("search_spots", query)
        if not query or not query.strip():
            raise ValueError("Search query cannot be empty.")
        needle = query.strip().lower()
        return [
            SpotSearchResult(id=spot_id, name=name)
            for spot_id, name in self.spots.items()
            if needle in name.lower()
        ]
