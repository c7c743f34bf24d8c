"""Redis-backed login throttling keyed by the lower-cased email.

Failed attempts are counted inside a rolling window. Reaching
``LOGIN_MAX_ATTEMPTS`` sets a block key that expires after
``LOGIN_BLOCK_SECONDS``. A Redis outage never locks anyone out: every
operation degrades to "not blocked".
"""
import logging

from redis.exceptions import RedisError

from linkup.core.config import settings
from linkup.core.redis import redis_client

logger = logging.getLogger(__name__)

FAIL_PREFIX = "login:fail:"
BLOCK_PREFIX = "login:block:"


class LoginThrottle:
    def __init__(self, email: str):
        self.email = email.lower()
        self.fail_key = f"{FAIL_PREFIX}{self.email}"
        self.block_key = f"{BLOCK_PREFIX}{self.email}"

    async def retry_after(self) -> int | None:
        """Seconds left on an active block, or None when logins are allowed."""
        r = redis_client()
        try:
            if not await r.exists(self.block_key):
                return None
            ttl = await r.ttl(self.block_key)
        except RedisError as exc:
            logger.warning("Throttle lookup failed for %s: %s", self.email, exc)
            return None
        return ttl if ttl and ttl > 0 else 0

    async def record_failure(self) -> int:
        r = redis_client()
        try:
            count = await r.incr(self.fail_key)
            if count == 1:
                await r.expire(self.fail_key, settings.LOGIN_ATTEMPT_WINDOW_SECONDS)
            if count >= settings.LOGIN_MAX_ATTEMPTS:
                await r.set(self.block_key, "1", ex=settings.LOGIN_BLOCK_SECONDS)
                logger.warning("Blocking logins for %s after %s failures", self.email, count)
        except RedisError as exc:
            logger.warning("Could not record failed login for %s: %s", self.email, exc)
            return 0
        return count

    async def clear(self) -> None:
        try:
            await redis_client().delete(self.fail_key)
        except RedisError as exc:
            logger.warning("Could not clear failed logins for %s: %s", self.email, exc)
