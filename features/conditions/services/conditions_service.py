import asyncio
import logging
from datetime import datetime
from typing import Optional
from fastapi import HTTPException

from features.conditions.models.conditions_types import ConditionsResponse
from features.river.services.river_service import RiverService
from features.safety.services.safety_service import SafetyService
from features.tides.services.tide_service import TideService
from features.currents.services.current_interpolator import localize

logger = logging.getLogger(__name__)

class ConditionsService:
    def __init__(
        self,
        river_service: RiverService,
        tide_service: TideService,
        safety_service: SafetyService
    ):
        self.river_service = river_service
        self.tide_service = tide_service
        self.safety_service = safety_service

    async def get_conditions(self, now: Optional[datetime] = None) -> ConditionsResponse:
        """Fetch river and tide conditions concurrently and assess safety.

        Either feed may fail independently; the assessment uses whatever
        readings are available.
        """
        tz = self.tide_service.tz
        now = localize(now, tz) if now else datetime.now(tz)

        river_result, tide_result = await asyncio.gather(
            self.river_service.get_river_conditions(),
            self.tide_service.get_tide_conditions(now),
            return_exceptions=True
        )

        errors = {}
        river = None
        tides = None

        if isinstance(river_result, HTTPException):
            logger.warning(f"River conditions unavailable: {river_result.detail}")
            errors["river"] = river_result.detail
        elif isinstance(river_result, BaseException):
            raise river_result
        else:
            river = river_result

        if isinstance(tide_result, HTTPException):
            logger.warning(f"Tide conditions unavailable: {tide_result.detail}")
            errors["tides"] = tide_result.detail
        elif isinstance(tide_result, BaseException):
            raise tide_result
        else:
            tides = tide_result

        safety = self.safety_service.assess(
            discharge=river.discharge if river else None,
            current_speed=tides.current.speed if tides else None,
            tide_phase_label=tides.tide.label if tides else None
        )

        return ConditionsResponse(
            generated_at=now,
            river=river,
            tides=tides,
            safety=safety,
            errors=errors
        )
