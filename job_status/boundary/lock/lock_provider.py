"""
Lock provider contract.

A lock provider hands out short-lived, key-scoped mutual exclusion with an
owner token, so only the holder can release it.

Dependencies: abc
System role: Mutual exclusion for status-record creation
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LockToken:
    """Proof of ownership for an acquired lock."""

    key: str
    owner: str = field(default_factory=lambda: uuid.uuid4().hex)


class LockProvider(ABC):
    """Abstract provider of expiring, owner-checked locks."""

    @abstractmethod
    def acquire(self, key: str, ttl: float, wait: float = 0) -> LockToken | None:
        """
        Try to take the lock for key.

        Args:
            key: Lock name
            ttl: Seconds after which the lock expires on its own
            wait: Seconds to keep retrying before giving up (0 = one attempt)

        Returns:
            LockToken when acquired, None when the lock is held elsewhere
        """

    @abstractmethod
    def release(self, token: LockToken) -> None:
        """Release a lock if it is still owned by token."""

