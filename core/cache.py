import logging

from fastapi_cache import FastAPICache
from fastapi_cache.backends.inmemory import InMemoryBackend

from core.config import settings

logger = logging.getLogger(__name__)

LESSONS_EXPIRE = settings.get_cache_ttl()["lessons"]

async def init_cache():
    """Response cache for static endpoints; disabled entirely when caching is off."""
    FastAPICache.init(
        backend=InMemoryBackend(),
        prefix=settings.cache["prefix"],
        enable=settings.cache["enabled"]
    )
    logger.info(f"Response cache initialized (enabled={settings.cache['enabled']})")
