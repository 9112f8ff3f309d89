import json
from typing import Any, Optional

from redis.asyncio import Redis
from structlog import get_logger

from app.config import settings

logger = get_logger()


def get_redis() -> Redis:
    return Redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)


async def cache_get_json(key: str) -> Optional[Any]:
    """Cached JSON value for key, or None on a miss or an unreachable Redis."""
    redis = get_redis()
    try:
        cached = await redis.get(key)
    except Exception as e:
        logger.warning("Cache read failed", cache_key=key, error=str(e))
        return None
    finally:
        await redis.close()
    if not cached:
        return None
    try:
        return json.loads(cached)
    except ValueError:
        logger.warning("Cache entry is not valid JSON; ignoring", cache_key=key)
        return None


async def cache_set_json(key: str, value: Any, ttl: int) -> None:
    if ttl <= 0:
        return
    redis = get_redis()
    try:
        await redis.setex(key, ttl, json.dumps(value))
    except Exception as e:
        logger.warning("Cache write failed", cache_key=key, error=str(e))
    finally:
        await redis.close()


async def clear_prefix(prefix: str) -> int:
    redis = get_redis()
    try:
        keys = await redis.keys(f"{prefix}*")
        if not keys:
            return 0
        return await redis.delete(*keys)
    finally:
        await redis.close()
