from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from features.river.models.river_types import RiverData
from features.safety.models.safety_types import SafetyAssessment
from features.tides.models.tide_types import TideConditionsResponse

class ConditionsResponse(BaseModel):
    """River, tide and safety in one payload; a failed feed is reported in errors"""
    generated_at: datetime
    river: Optional[RiverData] = None
    tides: Optional[TideConditionsResponse] = None
    safety: SafetyAssessment
    errors: dict = Field(default_factory=dict, description="Feed name to error detail")
