from typing import List, Optional
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field

class MeasurementType(str, Enum):
    DISCHARGE = "discharge"
    GAGE_HEIGHT = "gageHeight"

# USGS parameter code -> (type, name, unit, unit code)
USGS_PARAMETERS = {
    "00060": (MeasurementType.DISCHARGE, "Discharge", "cubic feet per second", "ft³/s"),
    "00065": (MeasurementType.GAGE_HEIGHT, "Gage Height", "feet", "ft"),
}

class RiverSample(BaseModel):
    """Single timestamped river reading"""
    time: datetime
    value: float

class RiverMeasurement(BaseModel):
    """Latest value and recent history for one USGS parameter"""
    type: MeasurementType
    name: str
    unit: str
    unit_code: str
    current: float = Field(..., description="Most recent reading")
    display: str = Field(..., description="Formatted most recent reading")
    history: List[RiverSample] = Field(default_factory=list)

class SiteLocation(BaseModel):
    latitude: float
    longitude: float

class RiverSite(BaseModel):
    name: str
    location: SiteLocation

class RiverData(BaseModel):
    """USGS river conditions for the first responsive station"""
    timestamp: datetime
    station: str = Field(..., description="USGS site number that supplied the data")
    source: str
    site: RiverSite
    measurements: List[RiverMeasurement]

    def get_measurement(self, measurement_type: MeasurementType) -> Optional[RiverMeasurement]:
        return next((m for m in self.measurements if m.type == measurement_type), None)

    @property
    def discharge(self) -> Optional[float]:
        measurement = self.get_measurement(MeasurementType.DISCHARGE)
        return measurement.current if measurement else None
