import logging
from datetime import datetime, tzinfo
from typing import List, Optional
from zoneinfo import ZoneInfo
from fastapi import HTTPException

from core.config import settings
from features.common.exceptions.provider_exceptions import ProviderError
from features.common.services.normalizer import parse_usgs_series, parse_usgs_site
from features.river.models.river_types import RiverData
from features.river.services.usgs_client import USGSWaterClient

logger = logging.getLogger(__name__)

class RiverService:
    """Service for USGS river discharge and gage height."""

    def __init__(
        self,
        client: Optional[USGSWaterClient] = None,
        stations: Optional[List[str]] = None,
        tz: Optional[tzinfo] = None
    ) -> None:
        self.client = client or USGSWaterClient()
        self.stations = stations or settings.usgs_stations
        self.tz = tz or ZoneInfo(settings.station_timezone)

    async def close(self):
        await self.client.close()

    async def get_river_conditions(self) -> RiverData:
        """Latest river measurements from the first station that returns data.

        Stations are tried in order; a station is skipped when it fails or
        returns no time series.
        """
        last_error: Optional[Exception] = None

        for station_id in self.stations:
            try:
                payload = await self.client.get_instantaneous_values(station_id)
            except ProviderError as e:
                last_error = e
                logger.warning(f"Station {station_id} failed: {str(e)}")
                continue

            time_series = (payload.get("value") or {}).get("timeSeries") or []
            if not time_series:
                logger.info(f"Station {station_id} returned no time series data")
                continue

            measurements = parse_usgs_series(payload, self.tz)
            if not measurements:
                logger.error(f"Station {station_id} data contains no valid discharge or gage height")
                raise HTTPException(
                    status_code=503,
                    detail=f"Station {station_id} data contains no valid measurements for discharge or gage height"
                )

            logger.info(f"Retrieved {len(measurements)} measurements from station {station_id}")
            return RiverData(
                timestamp=datetime.now(self.tz),
                station=station_id,
                source=f"USGS (Station {station_id})",
                site=parse_usgs_site(payload),
                measurements=measurements
            )

        logger.error(f"All USGS stations failed. Last error: {last_error}")
        detail = str(last_error) if last_error else "No stations returned valid data"
        raise HTTPException(
            status_code=503,
            detail=f"Unable to fetch river data from USGS API: {detail}"
        )
