from fastapi import APIRouter, Depends, Request
from features.river.models.river_types import RiverData
from features.river.services.river_service import RiverService

router = APIRouter(
    prefix="/river",
    tags=["River"]
)

def get_service(request: Request) -> RiverService:
    """Dependency to get the RiverService instance."""
    return request.app.state.river_service

@router.get(
    "",
    response_model=RiverData,
    summary="Get river conditions",
    description="Returns the latest Hudson River discharge and gage height from USGS with the last 48 readings"
)
async def get_river_conditions(
    service: RiverService = Depends(get_service)
) -> RiverData:
    """Get current river conditions."""
    return await service.get_river_conditions()
