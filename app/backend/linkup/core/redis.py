from redis.asyncio import Redis

from linkup.core.config import settings

_redis: Redis | None = None


def redis_client() -> Redis:
    """Process-wide client, created on first use.

    Short socket timeouts keep a Redis outage from stalling logins; callers
    treat ``RedisError`` as "no throttle information".
    """
    global _redis
    if _redis is None:
        _redis = Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            socket_timeout=settings.REDIS_TIMEOUT_SECONDS,
            socket_connect_timeout=settings.REDIS_TIMEOUT_SECONDS,
            decode_responses=True,
        )
    return _redis


async def close_redis() -> None:
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None
