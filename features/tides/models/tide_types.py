from typing import List, Optional
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field

from features.currents.models.current_types import CurrentReading

class TideKind(str, Enum):
    HIGH = "High"
    LOW = "Low"

    @classmethod
    def from_code(cls, code: str) -> 'TideKind':
        """Map NOAA hilo type codes ("H"/"L") to a tide kind."""
        normalized = (code or "").strip().upper()
        if normalized == "H":
            return cls.HIGH
        if normalized == "L":
            return cls.LOW
        raise ValueError(f"Unknown tide type code: {code!r}")

class TidePhase(str, Enum):
    RISING = "Rising"
    FALLING = "Falling"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        """Display label pairing the tide phase with its current."""
        if self is TidePhase.RISING:
            return "Rising (Flood)"
        if self is TidePhase.FALLING:
            return "Falling (Ebb)"
        return "Unknown"

class TidePrediction(BaseModel):
    """High or low tide event"""
    time: datetime = Field(..., description="Time of the event (station-local)")
    height: float = Field(..., description="Height of tide in feet above MLLW")
    kind: TideKind = Field(..., description="High or Low")

    class Config:
        frozen = True

class TideState(BaseModel):
    """Tidal state derived for a single instant"""
    phase: TidePhase = TidePhase.UNKNOWN
    next_high: Optional[TidePrediction] = None
    next_low: Optional[TidePrediction] = None

class TideStationInfo(BaseModel):
    """Stations backing the tide and current readings"""
    id: str = Field(..., description="Tide station identifier")
    name: str = Field(..., description="Tide station name")
    currents_id: Optional[str] = Field(None, description="Currents station identifier including bin")
    currents_name: Optional[str] = Field(None, description="Currents station name")

class TideSummary(BaseModel):
    """Current tide phase and upcoming events"""
    phase: TidePhase
    label: str = Field(..., description="Display label for the phase")
    next_high: Optional[TidePrediction] = None
    next_low: Optional[TidePrediction] = None
    predictions: List[TidePrediction] = Field(default_factory=list)

class TideStationPredictions(BaseModel):
    """Tide station with its high/low schedule"""
    id: str = Field(..., description="Station identifier")
    name: str = Field(..., description="Station name")
    predictions: List[TidePrediction] = Field(..., description="List of tide predictions")

class TideConditionsResponse(BaseModel):
    """Tide and current conditions for the configured stations"""
    timestamp: datetime
    station: TideStationInfo
    tide: TideSummary
    current: CurrentReading
