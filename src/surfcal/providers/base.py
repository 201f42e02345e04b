"""Forecast source interface and shared HTTP plumbing.

## Series

A forecast source exposes three independently indexed series per spot:

- Ratings: one categorical rating per hour
- Wave: one {min, max} wave height range per hour, in feet
- Daylight: one sunrise/sunset window per local day

The series are joined on exact timestamp equality by the rule engine
(`surfcal.rules.engine`). Sources make no promise that the series are
mutually complete.

## Authentication

Sources must be logged in before any data call. Calling a data method first
raises `NotLoggedInError`.

## Failures

Every failed request surfaces as `ProviderError` or one of its subclasses.
Only transient transport errors (timeouts, dropped connections) are retried;
HTTP error statuses never are. The rule engine does not catch provider
errors, so one failed fetch fails the whole evaluation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from surfcal.models.forecast import DaylightWindow, RatingSample, WaveSample
from surfcal.models.spot import SpotInfo, SpotSearchResult

TRANSIENT_ERRORS = (httpx.TimeoutException, httpx.NetworkError)
MAX_ATTEMPTS = 3


class ProviderError(Exception):
    """A forecast source request failed.

    Attributes:
        provider: Name of the failing source
        status_code: HTTP status, when the server answered
        response_body: Raw body of the failed response, if any
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class RateLimitError(ProviderError):
    """The source answered 429."""

    def __init__(self, message: str, *, provider: str, retry_after: int | None = None):
        super().__init__(message, provider=provider, status_code=429)
        self.retry_after = retry_after

    @classmethod
    def from_response(cls, provider: str, response: httpx.Response) -> RateLimitError:
        header = response.headers.get("Retry-After", "")
        return cls(
            f"{provider} rate limit reached",
            provider=provider,
            retry_after=int(header) if header.isdigit() else None,
        )


class AuthenticationError(ProviderError):
    """Credentials were rejected or the token is no longer valid."""


class NotLoggedInError(AuthenticationError):
    """A data call was made before `login()`."""


class ForecastSource(ABC):
    """Interface for anything that can serve surf forecast series.

    Sources are async context managers; leaving the block releases any
    network resources:

    ```python
    async with SurflineProvider() as source:
        await source.login(email, password)
        ratings = await source.get_ratings(spot_id, days=7)
    ```
    """

    name: str

    @abstractmethod
    async def login(self, email: str, password: str) -> None:
        """Authenticate with the source.

        Raises:
            AuthenticationError: If the credentials are rejected
        """

    @abstractmethod
    async def get_ratings(
        self, spot_id: str, days: int, interval_hours: int = 1
    ) -> list[RatingSample]:
        """Hourly ratings for a spot."""

    @abstractmethod
    async def get_wave(
        self, spot_id: str, days: int, interval_hours: int = 1
    ) -> list[WaveSample]:
        """Hourly wave heights for a spot."""

    @abstractmethod
    async def get_daylight(self, spot_id: str, days: int) -> list[DaylightWindow]:
        """Daily sunrise/sunset windows for a spot."""

    @abstractmethod
    async def get_spot_info(self, spot_id: str) -> SpotInfo: ...

    @abstractmethod
    async def search_spots(self, query: str) -> list[SpotSearchResult]: ...

    async def close(self) -> None:
        pass

    async def __aenter__(self) -> ForecastSource:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


class HttpForecastSource(ForecastSource):
    """A forecast source that talks JSON over HTTP.

    Subclasses set `name` and `base_url` and call `_get`/`_post`, which
    decode the body and turn failures into `ProviderError`s. Headers added
    to `_headers` (such as a bearer token) go out with every request.
    """

    base_url: str

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        user_agent: str = "surfcal/0.1.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            base_url: Replaces the class-level `base_url`
            timeout: Per-request timeout in seconds
            user_agent: Sent as the User-Agent header
            transport: Alternative httpx transport, e.g. `httpx.MockTransport`
        """
        self.base_url = base_url or self.base_url
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport
        self._headers: dict[str, str] = {}
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        # Created on first use so it binds to the running event loop
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    @retry(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        stop=stop_after_attempt(MAX_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        return await self.client.request(method, path, headers=self._headers, **kwargs)

    def _check_status(self, path: str, response: httpx.Response) -> None:
        status = response.status_code
        if status < 400:
            return
        if status == 429:
            raise RateLimitError.from_response(self.name, response)

        error_class = AuthenticationError if status in (401, 403) else ProviderError
        raise error_class(
            f"{self.name} returned {status} for {path}",
            provider=self.name,
            status_code=status,
            response_body=response.text,
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and decode its JSON body.

        Raises:
            RateLimitError: On 429
            AuthenticationError: On 401/403
            ProviderError: On any other error status, transport failure or
                undecodable body
        """
        try:
            response = await self._send(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise ProviderError(
                f"Request to {path} failed: {e}", provider=self.name
            ) from e

        self._check_status(path, response)

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                f"{self.name} sent a non-JSON body for {path}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            ) from e

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def _post(
        self, path: str, json: dict[str, Any], params: dict[str, Any] | None = None
    ) -> Any:
        return await self._request("POST", path, params=params, json=json)
