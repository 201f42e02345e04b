"""Surfline forecast provider.

## Endpoint
- Base URL: https://services.surfline.com

## Authentication
- POST /trusted/token with a password grant returns an `access_token`
- The token is sent as `Authorization: Bearer <token>` on every later call

## Forecast Endpoints
| Series | Path | Notes |
|--------|------|-------|
| Ratings | /kbyg/spots/forecasts/rating | data.rating[] |
| Wave | /kbyg/spots/forecasts/surf | data.surf[], `corrected=true`, feet |
| Daylight | /kbyg/spots/forecasts/sunlight | data.sunlight[] |

## Spot Endpoints
| Call | Path | Notes |
|------|------|-------|
| Details | /kbyg/spots/details | spot.name, spot.location.coordinates |
| Search | /kbyg/search/site | [0].hits.hits[]._source |

## Response Format (ratings)
```json
{
  "associated": {"location": {"lon": 0, "lat": 0}},
  "data": {
    "rating": [
      {"timestamp": 1672560000, "utcOffset": 0, "rating": {"key": "GOOD", "value": 4}}
    ]
  }
}
```
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from surfcal.models.forecast import DaylightWindow, RatingSample, WaveSample
from surfcal.models.spot import Coordinates, SpotInfo, SpotSearchResult
from surfcal.providers.base import (
    AuthenticationError,
    HttpForecastSource,
    NotLoggedInError,
    ProviderError,
)

logger = logging.getLogger(__name__)

# Public client credentials used by the Surfline web app
SURFLINE_AUTHORIZATION = (
    "Basic NWM1OWU3YzNmMGI2Y2IxYWQwMmJhZjY2OnNrX1FxWEpkbjZOeTVzTVJ1MjdBbWcz"
)

POPULAR_SPOTS: dict[str, str] = {
    "5842041f4e65fad6a7708876": "Malibu",
    "5842041f4e65fad6a7708815": "Pipeline",
    "5842041f4e65fad6a770883d": "Bells Beach",
    "5842041f4e65fad6a7708962": "Jeffreys Bay",
}


class SurflineProvider(HttpForecastSource):
    """Surfline KBYG API provider.

    Example:
        ```python
        async with SurflineProvider() as provider:
            await provider.login("me@example.com", "secret")
            ratings = await provider.get_ratings("5842041f4e65fad6a7708876", days=7)
        ```
    """

    name = "surfline"
    base_url = "https://services.surfline.com"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._access_token: str | None = None

    @property
    def is_logged_in(self) -> bool:
        return self._access_token is not None

    def _check_login(self, what: str) -> None:
        if not self.is_logged_in:
            raise NotLoggedInError(
                f"You must be logged in to get {what}.", provider=self.name
            )

    async def login(self, email: str, password: str) -> None:
        """Exchange email and password for an access token.

        Raises:
            AuthenticationError: If no token is returned
        """
        body = {
            "grant_type": "password",
            "username": email,
            "password": password,
            "forced": True,
            "device_id": "",
            "device_type": "",
            "authorizationString": SURFLINE_AUTHORIZATION,
        }
        try:
            data = await self._post(
                "/trusted/token", json=body, params={"isShortLived": "false"}
            )
        except ProviderError as e:
            logger.error(f"Error logging in to Surfline: {e}")
            raise AuthenticationError(
                "Failed to login to Surfline.",
                provider=self.name,
                status_code=e.status_code,
                response_body=e.response_body,
            ) from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise AuthenticationError(
                "Login failed: No access token received.", provider=self.name
            )

        self._access_token = token
        self._headers["Authorization"] = f"Bearer {token}"
        logger.info("Logged in to Surfline")

    async def _get_series(
        self, what: str, path: str, params: dict[str, Any], key: str
    ) -> list[dict[str, Any]]:
        self._check_login(what)
        try:
            data = await self._get(path, params=params)
        except ProviderError as e:
            logger.error(f"Error fetching {what} for spot {params.get('spotId')}: {e}")
            raise

        series = data.get("data") if isinstance(data, dict) else None
        items = series.get(key, []) if isinstance(series, dict) else None
        if not isinstance(items, list):
            logger.error(f"Unexpected {what} body for spot {params.get('spotId')}")
            raise ProviderError(
                f"Unexpected response structure from Surfline API ({what})",
                provider=self.name,
            )
        return items

    async def get_ratings(
        self, spot_id: str, days: int, interval_hours: int = 1
    ) -> list[RatingSample]:
        items = await self._get_series(
            "ratings",
            "/kbyg/spots/forecasts/rating",
            {"spotId": spot_id, "days": days, "intervalHours": interval_hours},
            "rating",
        )
        return self._translate(items, RatingSample)

    async def get_wave(
        self, spot_id: str, days: int, interval_hours: int = 1
    ) -> list[WaveSample]:
        items = await self._get_series(
            "wave data",
            "/kbyg/spots/forecasts/surf",
            {
                "spotId": spot_id,
                "days": days,
                "intervalHours": interval_hours,
                "corrected": "true",
                "units[surfHeight]": "FT",
            },
            "surf",
        )
        return self._translate(items, WaveSample)

    async def get_daylight(self, spot_id: str, days: int) -> list[DaylightWindow]:
        items = await self._get_series(
            "sunlight data",
            "/kbyg/spots/forecasts/sunlight",
            {"spotId": spot_id, "days": days, "intervalHours": 1},
            "sunlight",
        )
        return self._translate(items, DaylightWindow)

    async def get_spot_info(self, spot_id: str) -> SpotInfo:
        self._check_login("spot information")
        data = await self._get("/kbyg/spots/details", params={"spotId": spot_id})

        spot = data.get("spot") if isinstance(data, dict) else None
        if not spot:
            raise ProviderError(
                "Unexpected response structure from Surfline API",
                provider=self.name,
            )

        coords = (spot.get("location") or {}).get("coordinates") or [0, 0]
        return SpotInfo(
            id=spot_id,
            name=spot.get("name") or f"Unknown Spot {spot_id[-4:]}",
            coordinates=Coordinates.from_lon_lat(coords),
        )

    async def search_spots(self, query: str) -> list[SpotSearchResult]:
        """Search spots by name.

        Region and country come from the result's breadcrumbs: the first
        crumb is the country and the third (or second) is the region.

        Raises:
            ValueError: If the query is blank
        """
        self._check_login("spot search results")
        if not query or not query.strip():
            raise ValueError("Search query cannot be empty.")

        data = await self._get(
            "/kbyg/search/site",
            params={"q": query.strip(), "querySize": 10, "suggestionSize": 10},
        )
        if not isinstance(data, list) or not data:
            return []

        hits = (data[0].get("hits") or {}).get("hits") or []
        results: list[SpotSearchResult] = []
        for hit in hits:
            source = hit.get("_source", {})
            crumbs = source.get("breadCrumbs") or []
            location = source.get("location") or {}
            if len(crumbs) > 2:
                region = crumbs[2]
            elif len(crumbs) > 1:
                region = crumbs[1]
            else:
                region = None
            results.append(
                SpotSearchResult(
                    id=hit["_id"],
                    name=source.get("name") or "Unknown Spot",
                    region=region,
                    country=crumbs[0] if crumbs else None,
                    coordinates=Coordinates(
                        latitude=location.get("lat", 0),
                        longitude=location.get("lon", 0),
                    ),
                )
            )
        return results

    def _translate(self, items: list[dict[str, Any]], model: type) -> list:
        """Validate raw series entries into sample models."""
        try:
            return [model.model_validate(item) for item in items]
        except ValidationError as e:
            raise ProviderError(
                f"Malformed {model.__name__} data: {e}", provider=self.name
            ) from e
