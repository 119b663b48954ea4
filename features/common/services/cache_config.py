from typing import Any, Callable, Optional
from aiocache import SimpleMemoryCache

from core.config import settings

# Cache expiration times (in seconds)
TIDE_PREDICTIONS_EXPIRE = settings.get_cache_ttl()["tide_predictions"]
CURRENT_PREDICTIONS_EXPIRE = settings.get_cache_ttl()["current_predictions"]
RIVER_DATA_EXPIRE = settings.get_cache_ttl()["river_data"]

def new_payload_cache() -> SimpleMemoryCache:
    """Create an in-memory cache for raw upstream payloads.

    Each client owns its cache so derived state is always recomputed from
    a payload, never served from a previous request.
    """
    return SimpleMemoryCache(namespace=settings.cache["prefix"])

def payload_cache_key(product: str, station_id: str, *parts: Any) -> str:
    """Build cache key in format {product}:station:{station_id}[:part...]."""
    if not station_id:
        raise ValueError("station_id is required for caching")

    key = f"{product}:station:{station_id}"
    for part in parts:
        key += f":{part}"
    return key

async def get_or_fetch(
    cache: SimpleMemoryCache,
    key: str,
    fetch: Callable,
    ttl: Optional[int] = None
) -> Any:
    """Return a cached payload or fetch and store it.

    Empty payloads are not stored so the next request retries upstream.
    """
    if settings.cache["enabled"]:
        cached_value = await cache.get(key)
        if cached_value is not None:
            return cached_value

    value = await fetch()
    if settings.cache["enabled"] and value:
        await cache.set(key, value, ttl=ttl)
    return value
