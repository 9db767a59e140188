"""
In-process lock provider.

Thread-safe expiring locks held in a dict. Only coordinates callers in the
same process; use RedisLockProvider across workers.

Dependencies: threading, time
System role: Creation lock for single-process deployments and tests
"""

import threading
import time

from job_status.boundary.lock.lock_provider import LockProvider, LockToken

POLL_INTERVAL = 0.05


class InMemoryLockProvider(LockProvider):
    """Expiring locks stored in process memory."""

    def __init__(self) -> None:
        self._locks: dict[str, tuple[str, float]] = {}
        self._mutex = threading.Lock()

    def _try_acquire(self, key: str, ttl: float) -> LockToken | None:
        now = time.monotonic()
        with self._mutex:
            held = self._locks.get(key)
            if held is not None and held[1] > now:
                return None
            token = LockToken(key)
            self._locks[key] = (token.owner, now + ttl)
            return token

    def acquire(self, key: str, ttl: float, wait: float = 0) -> LockToken | None:
        deadline = time.monotonic() + max(wait, 0)
        while True:
            token = self._try_acquire(key, ttl)
            if token is not None or time.monotonic() >= deadline:
                return token
            time.sleep(POLL_INTERVAL)

    def release(self, token: LockToken) -> None:
        with self._mutex:
            held = self._locks.get(token.key)
            if held is not None and held[0] == token.owner:
                del self._locks[token.key]

    def is_locked(self, key: str) -> bool:
        """True while key is held and unexpired."""
        with self._mutex:
            held = self._locks.get(key)
            return held is not None and held[1] > time.monotonic()
