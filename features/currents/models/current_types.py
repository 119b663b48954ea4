from typing import Optional
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field

from features.common.utils.conversions import UnitConversions

class CurrentKind(str, Enum):
    EBB = "ebb"
    FLOOD = "flood"
    SLACK = "slack"

    @classmethod
    def from_label(cls, label: str) -> 'CurrentKind':
        """Map NOAA current type labels to a current kind."""
        try:
            return cls((label or "").strip().lower())
        except ValueError:
            raise ValueError(f"Unknown current type: {label!r}")

class CompassPointModel(BaseModel):
    abbreviation: str
    min_deg: float
    max_deg: float
    description: str

class CompassPoint(Enum):
    N = CompassPointModel(abbreviation="N", min_deg=337.5, max_deg=22.5, description="North")
    NE = CompassPointModel(abbreviation="NE", min_deg=22.5, max_deg=67.5, description="Northeast")
    E = CompassPointModel(abbreviation="E", min_deg=67.5, max_deg=112.5, description="East")
    SE = CompassPointModel(abbreviation="SE", min_deg=112.5, max_deg=157.5, description="Southeast")
    S = CompassPointModel(abbreviation="S", min_deg=157.5, max_deg=202.5, description="South")
    SW = CompassPointModel(abbreviation="SW", min_deg=202.5, max_deg=247.5, description="Southwest")
    W = CompassPointModel(abbreviation="W", min_deg=247.5, max_deg=292.5, description="West")
    NW = CompassPointModel(abbreviation="NW", min_deg=292.5, max_deg=337.5, description="Northwest")

    def __init__(self, model: CompassPointModel):
        self.abbreviation = model.abbreviation
        self.min_deg = model.min_deg
        self.max_deg = model.max_deg
        self.description = model.description

    @classmethod
    def from_degrees(cls, degrees: float) -> 'CompassPoint':
        degrees = degrees % 360
        for point in cls:
            if point.min_deg <= degrees < point.max_deg:
                return point
        return cls.N  # Default for 337.5-360 and 0-22.5

class CurrentPrediction(BaseModel):
    """Discrete current prediction (max flood, max ebb or slack)"""
    time: datetime = Field(..., description="Time of the prediction (station-local)")
    kind: CurrentKind
    velocity_major: float = Field(..., description="Signed velocity in knots, flood positive")
    mean_flood_direction: Optional[float] = Field(None, description="Mean flood direction in degrees")
    mean_ebb_direction: Optional[float] = Field(None, description="Mean ebb direction in degrees")

    class Config:
        frozen = True

class CurrentState(BaseModel):
    """Current speed and direction at a single instant"""
    speed_knots: float = Field(..., ge=0)
    direction_degrees: float = Field(..., ge=0, lt=360)
    kind: CurrentKind
    source_is_measured: bool

class CurrentReading(BaseModel):
    """Current state with display fields"""
    speed: float = Field(..., description="Current speed in knots")
    speed_mph: float = Field(..., description="Current speed in miles per hour")
    direction: float = Field(..., description="Direction the current flows toward, degrees true")
    compass: str = Field(..., description="Eight-point compass label for direction")
    kind: CurrentKind
    speed_unit: str = "knots"
    available: bool = Field(..., description="True when derived from NOAA current predictions")
    source: str
    timestamp: Optional[datetime] = None

    @classmethod
    def from_state(cls, state: CurrentState, timestamp: Optional[datetime] = None) -> 'CurrentReading':
        return cls(
            speed=state.speed_knots,
            speed_mph=UnitConversions.knots_to_mph(state.speed_knots),
            direction=state.direction_degrees,
            compass=CompassPoint.from_degrees(state.direction_degrees).abbreviation,
            kind=state.kind,
            available=state.source_is_measured,
            source="NOAA Currents" if state.source_is_measured else "Calculated from tide",
            timestamp=timestamp
        )
