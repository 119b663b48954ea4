from typing import List
from enum import Enum
from pydantic import BaseModel, Field

class SafetyLevel(str, Enum):
    SAFE = "safe"
    CAUTION = "caution"
    DANGER = "danger"

    @property
    def severity(self) -> int:
        return [SafetyLevel.SAFE, SafetyLevel.CAUTION, SafetyLevel.DANGER].index(self)

    @property
    def message(self) -> str:
        return {
            SafetyLevel.SAFE: "Safe for recreational kayaking",
            SafetyLevel.CAUTION: "Proceed with caution - experienced paddlers only",
            SafetyLevel.DANGER: "Dangerous conditions - DO NOT kayak",
        }[self]

    @property
    def headline(self) -> str:
        return {
            SafetyLevel.SAFE: "✅ Conditions are favorable for kayaking",
            SafetyLevel.CAUTION: "⚠️ Use caution - conditions require experience",
            SafetyLevel.DANGER: "🚫 DANGEROUS - Stay off the water",
        }[self]

class SafetyThresholds(BaseModel):
    """Caution and danger limits; a reading strictly above a limit triggers it"""
    discharge_caution: float = Field(..., description="Discharge caution threshold in cfs")
    discharge_danger: float = Field(..., description="Discharge danger threshold in cfs")
    current_caution: float = Field(..., description="Current caution threshold in knots")
    current_danger: float = Field(..., description="Current danger threshold in knots")

class SafetyAssessment(BaseModel):
    """Kayaking advisory for the current conditions"""
    level: SafetyLevel
    message: str
    recommendations: List[str] = Field(default_factory=list)
