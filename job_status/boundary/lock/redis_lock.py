"""
Redis lock provider.

SET NX EX acquisition with an owner value and a compare-and-delete release
script, so an expired lock re-taken by another worker is never released
by the previous owner.

Dependencies: redis
System role: Distributed creation lock shared by all workers
"""

import logging
import time

import redis

from job_status.boundary.lock.lock_provider import LockProvider, LockToken

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.05

RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
end
return 0
"""


class RedisLockProvider(LockProvider):
    """Expiring locks stored in Redis."""

    def __init__(self, client: redis.Redis) -> None:
        """
        Initialize with a Redis client.

        Args:
            client: Redis client (decode_responses may be on or off)
        """
        self.client = client
        self._release = client.register_script(RELEASE_SCRIPT)

    @classmethod
    def from_url(cls, url: str) -> "RedisLockProvider":
        """Build a provider from a redis:// URL."""
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def acquire(self, key: str, ttl: float, wait: float = 0) -> LockToken | None:
        deadline = time.monotonic() + max(wait, 0)
        token = LockToken(key)
        while True:
            if self.client.set(key, token.owner, nx=True, ex=max(int(ttl), 1)):
                return token
            if time.monotonic() >= deadline:
                return None
            time.sleep(POLL_INTERVAL)

    def release(self, token: LockToken) -> None:
        released = self._release(keys=[token.key], args=[token.owner])
        if not released:
            logger.warning(
                f"{__name__}:release - Lock expired before release",
                extra={"lock_key": token.key},
            )
