"""Forecast sample models.

These mirror the hourly and daily series returned by a forecast source.
Field aliases match the upstream camelCase JSON so samples can be validated
straight from API payloads:

```python
RatingSample.model_validate(
    {"timestamp": 1672560000, "utcOffset": 0, "rating": {"key": "GOOD", "value": 4}}
)
```

All timestamps are Unix epoch seconds.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from surfcal.models.surf import Rating


class _Sample(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RatingInfo(_Sample):
    """Categorical rating with the provider's numeric score.

    Keys outside the six-point scale are kept as plain strings; the rule
    engine skips those hours.
    """

    key: Rating | str = Field(union_mode="left_to_right")
    value: float = 0

    @property
    def is_known(self) -> bool:
        return isinstance(self.key, Rating)


class RatingSample(_Sample):
    """Hourly surf rating."""

    timestamp: int
    utc_offset: float = Field(default=0, alias="utcOffset")
    rating: RatingInfo


class WaveRange(_Sample):
    """Wave height range in feet. `max` is the authoritative value."""

    min: float
    max: float
    human_relation: str | None = Field(default=None, alias="humanRelation")


class WaveSample(_Sample):
    """Hourly wave height."""

    timestamp: int
    utc_offset: float = Field(default=0, alias="utcOffset")
    surf: WaveRange


class DaylightWindow(_Sample):
    """Sun times for one local day.

    `midnight` marks the start of the local day the window belongs to.
    """

    midnight: int
    sunrise: int
    sunset: int
    sunset_utc_offset: float = Field(default=0, alias="sunsetUTCOffset")
    midnight_utc_offset: float = Field(default=0, alias="midnightUTCOffset")
    sunrise_utc_offset: float = Field(default=0, alias="sunriseUTCOffset")
    dawn: int | None = None
    dawn_utc_offset: float | None = Field(default=None, alias="dawnUTCOffset")
    dusk: int | None = None
    dusk_utc_offset: float | None = Field(default=None, alias="duskUTCOffset")
