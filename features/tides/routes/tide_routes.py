from fastapi import APIRouter, Depends, Request
from features.tides.models.tide_types import (
    TideConditionsResponse,
    TideStationPredictions
)
from features.tides.services.tide_service import TideService

router = APIRouter(
    prefix="/tides",
    tags=["Tides"]
)

def get_service(request: Request) -> TideService:
    """Dependency to get the TideService instance."""
    return request.app.state.tide_service

@router.get(
    "",
    response_model=TideConditionsResponse,
    summary="Get current tide conditions",
    description="Returns the tide phase, next high and low tides and the current at the Hudson River entrance"
)
async def get_tide_conditions(
    service: TideService = Depends(get_service)
) -> TideConditionsResponse:
    """Get tide phase, upcoming events and current."""
    return await service.get_tide_conditions()

@router.get(
    "/predictions",
    response_model=TideStationPredictions,
    summary="Get tide predictions",
    description="Returns the high/low tide schedule for The Battery, NY"
)
async def get_station_predictions(
    service: TideService = Depends(get_service)
) -> TideStationPredictions:
    """Get the tide schedule."""
    return await service.get_station_predictions()
