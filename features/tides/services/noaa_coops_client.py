import asyncio
import logging
import aiohttp
from datetime import datetime
from typing import List, Dict, Any, Optional

from core.config import settings
from features.common.exceptions.provider_exceptions import ProviderUnavailableError
from features.common.services.cache_config import (
    CURRENT_PREDICTIONS_EXPIRE,
    TIDE_PREDICTIONS_EXPIRE,
    get_or_fetch,
    new_payload_cache,
    payload_cache_key
)

logger = logging.getLogger(__name__)

class NOAACoopsClient:
    """Client for NOAA CO-OPS tide and current predictions."""

    def __init__(self, base_url: str = settings.coops_base_url):
        self.data_url = base_url
        self._session: Optional[aiohttp.ClientSession] = None
        self._cache = new_payload_cache()

    async def _init_session(self) -> aiohttp.ClientSession:
        if not self._session:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=settings.request["timeout"]),
                headers={"Accept": "application/json"}
            )
        return self._session

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    async def get_tide_predictions(self, station_id: str, begin_date: datetime) -> List[Dict[str, Any]]:
        """Raw high/low tide predictions starting at ``begin_date``."""
        params = {
            **settings.coops_params,
            "product": "predictions",
            "station": station_id,
            "interval": "hilo",
            "begin_date": begin_date.strftime("%Y%m%d"),
            "range": str(settings.tide_range_hours)
        }
        key = payload_cache_key("tide_predictions", station_id, params["begin_date"])

        async def fetch():
            data = await self._request(params, station_id)
            return data.get("predictions") or []

        return await get_or_fetch(self._cache, key, fetch, ttl=TIDE_PREDICTIONS_EXPIRE)

    async def get_current_predictions(self, station_id: str, bin_number: str, begin_date: datetime) -> List[Dict[str, Any]]:
        """Raw max-flood/max-ebb/slack current predictions for one depth bin."""
        params = {
            **settings.coops_params,
            "product": "currents_predictions",
            "station": station_id,
            "bin": bin_number,
            "interval": "MAX_SLACK",
            "begin_date": begin_date.strftime("%Y%m%d"),
            "range": str(settings.tide_range_hours)
        }
        params.pop("datum", None)
        key = payload_cache_key("current_predictions", f"{station_id}_{bin_number}", params["begin_date"])

        async def fetch():
            data = await self._request(params, station_id)
            return (data.get("current_predictions") or {}).get("cp") or []

        return await get_or_fetch(self._cache, key, fetch, ttl=CURRENT_PREDICTIONS_EXPIRE)

    async def _request(self, params: Dict[str, str], station_id: str) -> Dict[str, Any]:
        try:
            session = await self._init_session()
            logger.info(f"Fetching {params['product']} for NOAA station {station_id}")

            async with session.get(self.data_url, params=params) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)

            if not isinstance(data, dict):
                raise ProviderUnavailableError(f"Unexpected NOAA response for station {station_id}")

            if "error" in data:
                message = (data["error"] or {}).get("message", "")
                if "No Predictions data was found" in message or "No data was found" in message:
                    logger.warning(f"No {params['product']} available for station {station_id}")
                    return {}
                raise ProviderUnavailableError(message or "Unknown error from NOAA API")

            return data

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Error fetching {params['product']} for station {station_id}: {str(e)}")
            raise ProviderUnavailableError(f"NOAA request failed: {str(e)}")
