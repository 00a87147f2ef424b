import logging

from redis.asyncio import Redis as AsyncRedis
from redis import Redis as SyncRedis

from recipegen.settings import settings

logger = logging.getLogger("recipegen.store")

_redis_async: AsyncRedis | None = None
_redis_sync: SyncRedis | None = None

def redis_url() -> str:
    return settings.redis_url

async def get_redis() -> AsyncRedis:
    global _redis_async
    if _redis_async is None:
        _redis_async = AsyncRedis.from_url(redis_url(), decode_responses=True)
    return _redis_async

def get_sync_redis() -> SyncRedis:
    global _redis_sync
    if _redis_sync is None:
        _redis_sync = SyncRedis.from_url(redis_url(), decode_responses=True)
    return _redis_sync

async def ping() -> bool:
    try:
        r = await get_redis()
        return bool(await r.ping())
    except Exception as e:
        logger.warning("Redis ping failed: %s", e)
        return False
