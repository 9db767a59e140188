"""
Lock providers for status-record creation.

Exports:
  - LockProvider, LockToken: Provider contract
  - InMemoryLockProvider: Process-local implementation
  - RedisLockProvider: Redis-backed implementation
"""

from job_status.boundary.lock.lock_provider import LockProvider, LockToken
from job_status.boundary.lock.memory_lock import InMemoryLockProvider
from job_status.boundary.lock.redis_lock import RedisLockProvider

__all__ = [
    "LockProvider",
    "LockToken",
    "InMemoryLockProvider",
    "RedisLockProvider",
]
