from fastapi import APIRouter, Depends
from features.currents.models.current_types import CurrentReading
from features.tides.routes.tide_routes import get_service
from features.tides.services.tide_service import TideService

router = APIRouter(
    prefix="/currents",
    tags=["Currents"]
)

@router.get(
    "",
    response_model=CurrentReading,
    summary="Get current speed and direction",
    description="Returns the interpolated NOAA current, or an estimate from the tide when current predictions are unavailable"
)
async def get_current(
    service: TideService = Depends(get_service)
) -> CurrentReading:
    """Get the current at the Hudson River entrance."""
    return await service.get_current()
