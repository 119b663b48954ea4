import asyncio
import logging
import aiohttp
from typing import Any, Dict, List, Optional

from core.config import settings
from features.common.exceptions.provider_exceptions import ProviderUnavailableError
from features.common.services.cache_config import (
    RIVER_DATA_EXPIRE,
    get_or_fetch,
    new_payload_cache,
    payload_cache_key
)

logger = logging.getLogger(__name__)

class USGSWaterClient:
    """Client for USGS NWIS instantaneous values."""

    def __init__(self, base_url: str = settings.usgs_base_url):
        self.base_url = base_url
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

    async def get_instantaneous_values(
        self,
        station_id: str,
        parameter_codes: List[str] = settings.usgs_parameter_codes,
        period: str = settings.usgs_period
    ) -> Dict[str, Any]:
        """Raw instantaneous-values payload for one site."""
        key = payload_cache_key("river_data", station_id, period, ",".join(parameter_codes))

        async def fetch():
            return await self._request(station_id, parameter_codes, period)

        return await get_or_fetch(self._cache, key, fetch, ttl=RIVER_DATA_EXPIRE)

    async def _request(self, station_id: str, parameter_codes: List[str], period: str) -> Dict[str, Any]:
        params = {
            "format": "json",
            "sites": station_id,
            "period": period,
            "parameterCd": ",".join(parameter_codes)
        }
        try:
            session = await self._init_session()
            logger.info(f"Fetching instantaneous values for USGS station {station_id}")

            async with session.get(self.base_url, params=params) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)

            if not isinstance(data, dict):
                raise ProviderUnavailableError(f"Unexpected USGS response for station {station_id}")
            return data

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Error fetching USGS data for station {station_id}: {str(e)}")
            raise ProviderUnavailableError(f"USGS request failed for station {station_id}: {str(e)}")
