import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import List, Optional
from zoneinfo import ZoneInfo
from fastapi import HTTPException

from core.config import settings
from features.common.exceptions.provider_exceptions import ProviderError
from features.common.services.normalizer import parse_current_records, parse_tide_records
from features.currents.models.current_types import CurrentReading, CurrentState
from features.currents.services.current_interpolator import localize, resolve_current
from features.currents.services.fallback_estimator import estimate_current
from features.tides.models.tide_types import (
    TideConditionsResponse,
    TidePrediction,
    TideState,
    TideStationInfo,
    TideStationPredictions,
    TideSummary
)
from features.tides.services.noaa_coops_client import NOAACoopsClient
from features.tides.services.tide_phase import resolve_phase

logger = logging.getLogger(__name__)

@dataclass
class TideSnapshot:
    """Everything derived from one fetch of the NOAA feeds."""
    now: datetime
    predictions: List[TidePrediction]
    tide_state: TideState
    current_state: CurrentState

class TideService:
    """Service deriving tide and current state from NOAA CO-OPS predictions."""

    def __init__(self, client: Optional[NOAACoopsClient] = None, tz: Optional[tzinfo] = None) -> None:
        self.client = client or NOAACoopsClient()
        self.tz = tz or ZoneInfo(settings.station_timezone)
        self.station = TideStationInfo(
            id=settings.tide_station_id,
            name=settings.tide_station_name,
            currents_id=f"{settings.currents_station_id}_{settings.currents_bin}",
            currents_name=settings.currents_station_name
        )

    async def close(self):
        await self.client.close()

    def _begin_date(self, now: datetime) -> datetime:
        # Start early enough that the event before "now" is in the phase window
        return localize(now, self.tz) - timedelta(hours=12)

    async def _fetch_tides(self, now: datetime) -> List[TidePrediction]:
        records = await self.client.get_tide_predictions(settings.tide_station_id, self._begin_date(now))
        return parse_tide_records(records, self.tz)

    async def _fetch_currents(self, now: datetime):
        records = await self.client.get_current_predictions(
            settings.currents_station_id,
            settings.currents_bin,
            self._begin_date(now)
        )
        return parse_current_records(records, self.tz)

    async def get_snapshot(self, now: Optional[datetime] = None) -> TideSnapshot:
        """Fetch both NOAA feeds concurrently and derive tide and current state.

        Raises HTTPException(503) when no tide predictions are available.
        Missing current predictions fall back to an estimate from the tide.
        """
        now = localize(now, self.tz) if now else datetime.now(self.tz)

        tides_result, currents_result = await asyncio.gather(
            self._fetch_tides(now),
            self._fetch_currents(now),
            return_exceptions=True
        )

        if isinstance(tides_result, BaseException):
            if not isinstance(tides_result, ProviderError):
                raise tides_result
            logger.error(f"Tide predictions unavailable: {str(tides_result)}")
            raise HTTPException(status_code=503, detail=f"Unable to fetch tide data from NOAA API: {str(tides_result)}")

        if not tides_result:
            logger.error(f"No tide predictions returned for station {settings.tide_station_id}")
            raise HTTPException(status_code=503, detail="No tide data available")

        if isinstance(currents_result, BaseException):
            if not isinstance(currents_result, ProviderError):
                raise currents_result
            logger.warning(f"Current predictions unavailable, estimating from tide: {str(currents_result)}")
            currents_result = []

        tide_state = resolve_phase(tides_result, now)
        current_state = resolve_current(currents_result, now, self.tz)
        if current_state is None:
            current_state = estimate_current(tide_state, now)
            logger.info(f"Using calculated current speed {current_state.speed_knots:.2f} kn")

        return TideSnapshot(
            now=now,
            predictions=sorted(tides_result, key=lambda p: p.time),
            tide_state=tide_state,
            current_state=current_state
        )

    async def get_tide_conditions(self, now: Optional[datetime] = None) -> TideConditionsResponse:
        """Tide phase, next events and current for the configured stations."""
        try:
            snapshot = await self.get_snapshot(now)
            return self.build_response(snapshot)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error building tide conditions: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def build_response(self, snapshot: TideSnapshot) -> TideConditionsResponse:
        state = snapshot.tide_state
        return TideConditionsResponse(
            timestamp=snapshot.now,
            station=self.station,
            tide=TideSummary(
                phase=state.phase,
                label=state.phase.label,
                next_high=state.next_high,
                next_low=state.next_low,
                predictions=snapshot.predictions
            ),
            current=CurrentReading.from_state(snapshot.current_state, timestamp=snapshot.now)
        )

    async def get_current(self, now: Optional[datetime] = None) -> CurrentReading:
        """Current speed and direction only."""
        try:
            snapshot = await self.get_snapshot(now)
            return CurrentReading.from_state(snapshot.current_state, timestamp=snapshot.now)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error resolving current: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    async def get_station_predictions(self, now: Optional[datetime] = None) -> TideStationPredictions:
        """High/low tide schedule for the tide station."""
        now = localize(now, self.tz) if now else datetime.now(self.tz)
        try:
            predictions = await self._fetch_tides(now)
        except ProviderError as e:
            logger.error(f"Error getting predictions for station {settings.tide_station_id}: {str(e)}")
            raise HTTPException(status_code=503, detail=str(e))

        return TideStationPredictions(
            id=self.station.id,
            name=self.station.name,
            predictions=sorted(predictions, key=lambda p: p.time)
        )
