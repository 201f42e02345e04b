"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
Credentials should be provided via environment variables, not config files.

## Environment Variables

- SURFLINE_EMAIL / SURFLINE_PASSWORD: Surfline account (required to fetch
  forecasts)
- GOOGLE_CALENDAR_API_KEY: Google API key (optional, enables calendar checks)
- LOG_LEVEL: Logging level (default: WARNING)
- DEBUG: Enable debug mode (default: false)

## Example .env file

```
SURFLINE_EMAIL=me@example.com
SURFLINE_PASSWORD=secret
GOOGLE_CALENDAR_API_KEY=your-google-api-key
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from surfcal.models.surf import AcceptanceCriteria, Rating


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "surfcal"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Surfline
    surfline_email: str | None = None
    surfline_password: str | None = None
    surfline_base_url: str = "https://services.surfline.com"
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    # Google Calendar
    google_calendar_api_key: str | None = None
    calendar_lookahead_days: int = Field(default=7, ge=1, le=60)

    # Surf criteria defaults
    default_days: int = Field(default=7, ge=1, le=17)
    default_min_wave_height: float = Field(default=2.0, ge=0)
    default_min_rating: Rating = Rating.POOR_TO_FAIR

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator("default_min_rating", mode="before")
    @classmethod
    def parse_rating(cls, v: str | Rating) -> Rating:
        return Rating.parse(v) if isinstance(v, str) else v

    @property
    def surfline_configured(self) -> bool:
        """Check if Surfline credentials are configured."""
        return bool(self.surfline_email and self.surfline_password)

    @property
    def calendar_configured(self) -> bool:
        """Check if Google Calendar access is configured."""
        return bool(self.google_calendar_api_key)

    def require_surfline(self) -> tuple[str, str]:
        """Return Surfline credentials.

        Raises:
            ConfigurationError: If either credential is missing
        """
        if not self.surfline_configured:
            raise ConfigurationError(
                "SURFLINE_EMAIL and SURFLINE_PASSWORD must be set in environment variables"
            )
        return self.surfline_email, self.surfline_password

    def default_criteria(self) -> AcceptanceCriteria:
        return AcceptanceCriteria(
            min_wave_height=self.default_min_wave_height,
            min_rating=self.default_min_rating,
        )


@lru_cache
def get_settings() -> Settings:
    """Settings for this process, read once from the environment.

    Tests and long-running processes can force a re-read with:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()
