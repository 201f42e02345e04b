"""Surf spot routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from surfcal.api.dependencies import get_forecast_source
from surfcal.models.spot import SpotInfo, SpotSearchResult
from surfcal.providers.base import ForecastSource, ProviderError
from surfcal.providers.surfline import POPULAR_SPOTS

router = APIRouter()


@router.get("/popular", response_model=list[SpotSearchResult])
async def list_popular_spots() -> list[SpotSearchResult]:
    """Well-known spots with their IDs."""
    return [SpotSearchResult(id=spot_id, name=name) for spot_id, name in POPULAR_SPOTS.items()]


@router.get("/search", response_model=list[SpotSearchResult])
async def search_spots(
    q: str = Query(..., min_length=1, description="Spot name to search for"),
    forecast_source: ForecastSource = Depends(get_forecast_source),
) -> list[SpotSearchResult]:
    """Search surf spots by name."""
    try:
        return await forecast_source.search_spots(q)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except ProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to search spots: {e}",
        )


@router.get("/{spot_id}", response_model=SpotInfo)
async def get_spot(
    spot_id: str,
    forecast_source: ForecastSource = Depends(get_forecast_source),
) -> SpotInfo:
    """Get a spot's name and location."""
    try:
        return await forecast_source.get_spot_info(spot_id)
    except ProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch spot information: {e}",
        )
