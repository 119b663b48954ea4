from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from features.safety.models.safety_types import SafetyAssessment
from features.safety.services.safety_service import SafetyService

router = APIRouter(
    prefix="/safety",
    tags=["Safety"]
)

def get_service(request: Request) -> SafetyService:
    """Dependency to get the SafetyService instance."""
    return request.app.state.safety_service

@router.get(
    "",
    response_model=SafetyAssessment,
    summary="Assess kayaking safety",
    description="Returns a safety level and recommendations for the given discharge, current speed and tide phase"
)
async def assess_safety(
    discharge: Optional[float] = Query(None, ge=0, description="River discharge in cubic feet per second"),
    current_speed: Optional[float] = Query(None, ge=0, description="Current speed in knots"),
    tide_phase: Optional[str] = Query(None, description="Tide phase label, e.g. 'Rising (Flood)'"),
    service: SafetyService = Depends(get_service)
) -> SafetyAssessment:
    """Assess safety for explicit readings."""
    return service.assess(discharge, current_speed, tide_phase)
