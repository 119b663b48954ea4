from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, List, Any

class Settings(BaseSettings):
    """Application settings."""

    # Station-local civil time used by NOAA lst_ldt timestamps
    station_timezone: str = "America/New_York"

    # NOAA CO-OPS settings
    coops_base_url: str = "https://api.tidesandcurrents.noaa.gov/api/prod/datagetter"
    tide_station_id: str = "8518750"  # The Battery, NY
    tide_station_name: str = "The Battery, NY (Tide Heights)"
    currents_station_id: str = "NYH1927"  # Hudson River north of George Washington Bridge
    currents_bin: str = "13"
    currents_station_name: str = "Hudson River Entrance - NYH1927_13 (Currents)"
    tide_range_hours: int = 48
    coops_params: Dict = {
        "application": "NOS.COOPS.TAC.WL",
        "datum": "MLLW",
        "units": "english",
        "time_zone": "lst_ldt",
        "format": "json"
    }

    # USGS NWIS settings
    usgs_base_url: str = "https://waterservices.usgs.gov/nwis/iv/"
    # Lower Hudson stations report no real-time discharge, so use upstate gauges
    usgs_stations: List[str] = [
        "01335754",  # Hudson River above Lock 1 near Waterford NY
        "01335755",  # Hudson River at Lock 1 near Waterford NY
        "01318500",  # Hudson River at Hadley NY
    ]
    usgs_period: str = "P1D"
    usgs_parameter_codes: List[str] = ["00060", "00065"]  # discharge, gage height
    usgs_history_length: int = 48
    default_site_location: Dict[str, float] = {
        "latitude": 40.7484,
        "longitude": -73.9857
    }

    # Safety thresholds (strictly greater than triggers the level)
    discharge_caution_cfs: float = 30000
    discharge_danger_cfs: float = 50000
    current_caution_knots: float = 2.5
    current_danger_knots: float = 4.0

    # Current estimation
    slack_threshold_knots: float = 0.2
    flood_bearing_degrees: float = 11.0   # upstream / north
    ebb_bearing_degrees: float = 183.0    # downstream / south

    cache: Dict[str, Any] = {
        "enabled": True,
        "backend": "memory",
        "prefix": "hudson_river"
    }

    cors_origins: List[str] = ["*"]

    request: Dict = {
        "timeout": 30,
    }

    def get_cache_ttl(self) -> Dict[str, int]:
        """Get cache TTL values for upstream payloads."""
        return {
            "tide_predictions": 3600,     # 1 hour
            "current_predictions": 3600,  # 1 hour
            "river_data": 900,            # 15 minutes (USGS instantaneous values)
            "lessons": 86400              # 24 hours for static lesson content
        }

    model_config = SettingsConfigDict(
        env_prefix="hudson_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
