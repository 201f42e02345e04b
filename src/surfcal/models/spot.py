"""Surf spot models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """Geographic coordinates (latitude/longitude)."""

    latitude: float = Field(default=0.0, ge=-90, le=90)
    longitude: float = Field(default=0.0, ge=-180, le=180)

    @classmethod
    def from_lon_lat(cls, pair: list[float] | tuple[float, float]) -> Coordinates:
        """Build from a GeoJSON-style [longitude, latitude] pair."""
        return cls(latitude=pair[1], longitude=pair[0])

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"


class SpotInfo(BaseModel):
    """Basic information about a surf spot."""

    id: str
    name: str
    coordinates: Coordinates = Field(default_factory=Coordinates)


class SpotSearchResult(BaseModel):
    """A spot returned by a name search."""

    id: str
    name: str
    region: str | None = None
    country: str | None = None
    coordinates: Coordinates = Field(default_factory=Coordinates)
