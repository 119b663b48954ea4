from fastapi import APIRouter, Depends, Request
from features.conditions.models.conditions_types import ConditionsResponse
from features.conditions.services.conditions_service import ConditionsService

router = APIRouter(
    prefix="/conditions",
    tags=["Conditions"]
)

def get_service(request: Request) -> ConditionsService:
    """Dependency to get the ConditionsService instance."""
    return request.app.state.conditions_service

@router.get(
    "",
    response_model=ConditionsResponse,
    summary="Get combined conditions",
    description="Returns river, tide and current conditions with a kayaking safety assessment"
)
async def get_conditions(
    service: ConditionsService = Depends(get_service)
) -> ConditionsResponse:
    """Get all live conditions."""
    return await service.get_conditions()
