"""Surf condition models.

## Rating Scale

Surf conditions are rated on a fixed six-point scale, worst to best:

| Key | Rank |
|-----|------|
| VERY_POOR | 0 |
| POOR | 1 |
| POOR_TO_FAIR | 2 |
| FAIR | 3 |
| GOOD | 4 |
| VERY_GOOD | 5 |

Ratings are compared by rank, never by string value.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

HOUR_SECONDS = 3600
DAY_SECONDS = 86400


class Rating(str, Enum):
    """Surf condition rating."""

    VERY_POOR = "VERY_POOR"
    POOR = "POOR"
    POOR_TO_FAIR = "POOR_TO_FAIR"
    FAIR = "FAIR"
    GOOD = "GOOD"
    VERY_GOOD = "VERY_GOOD"

    @property
    def rank(self) -> int:
        """Ordinal position on the rating scale (0 = worst)."""
        return RATING_RANKS[self]

    @classmethod
    def parse(cls, value: str) -> Rating:
        """Parse a rating key, ignoring case.

        Raises:
            ValueError: If the value is not one of the six rating keys
        """
        try:
            return cls(value.strip().upper())
        except ValueError:
            valid = ", ".join(r.value for r in cls)
            raise ValueError(f"Invalid rating '{value}'. Must be one of: {valid}")


RATING_RANKS: dict[Rating, int] = {
    Rating.VERY_POOR: 0,
    Rating.POOR: 1,
    Rating.POOR_TO_FAIR: 2,
    Rating.FAIR: 3,
    Rating.GOOD: 4,
    Rating.VERY_GOOD: 5,
}


class AcceptanceCriteria(BaseModel):
    """Minimum conditions for an hour to count as surfable.

    Both bounds are inclusive.
    """

    model_config = ConfigDict(frozen=True)

    min_wave_height: float = Field(
        default=2.0, ge=0, description="Minimum wave height in feet"
    )
    min_rating: Rating = Field(
        default=Rating.POOR_TO_FAIR, description="Minimum surf rating"
    )


DEFAULT_CRITERIA = AcceptanceCriteria()


class SurfableHour(BaseModel):
    """One hour at one spot that meets the acceptance criteria.

    `calendar_conflict` is None until the hour has been checked against a
    calendar; after that it is True if any busy interval overlaps the hour.
    """

    model_config = ConfigDict(frozen=True)

    start_time: int = Field(..., description="Start of the hour (Unix seconds)")
    end_time: int = Field(..., description="End of the hour (Unix seconds)")
    spot_id: str
    condition: Rating
    wave_height: float = Field(..., description="Maximum wave height in feet")
    calendar_conflict: bool | None = None

    @model_validator(mode="after")
    def validate_one_hour(self) -> Self:
        """Surfable hours always span exactly one hour."""
        if self.end_time - self.start_time != HOUR_SECONDS:
            raise ValueError(
                f"Surfable hour must span {HOUR_SECONDS}s, "
                f"got {self.end_time - self.start_time}s"
            )
        return self

    @classmethod
    def starting_at(
        cls,
        start_time: int,
        spot_id: str,
        condition: Rating,
        wave_height: float,
    ) -> Self:
        return cls(
            start_time=start_time,
            end_time=start_time + HOUR_SECONDS,
            spot_id=spot_id,
            condition=condition,
            wave_height=wave_height,
        )

    def with_conflict(self, conflict: bool) -> SurfableHour:
        """Return a copy annotated with a calendar conflict flag."""
        return self.model_copy(update={"calendar_conflict": conflict})

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON types.

        The conflict flag is left out entirely when no calendar was checked.
        """
        return self.model_dump(mode="json", exclude_none=True)
