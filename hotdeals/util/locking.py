"""Keyed asyncio locks with bounded waits.

Usage:
    locks = KeyedLocks(default_timeout=5.0)

    async with locks.hold(("deal", deal_id)):
        ...  # exclusive for this key, other keys proceed independently
"""

import asyncio
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager

import logfire

from hotdeals.util.error import LockTimeoutError


class KeyedLocks:
    """Registry of asyncio locks, one per key.

    Entries exist only while some task holds or waits for the key.
    """

    def __init__(self, default_timeout: float) -> None:
        """Initialize the registry.

        Args:
            default_timeout: Seconds to wait for a lock when the caller
                does not pass a timeout
        """
        self.default_timeout = default_timeout
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._users: dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(
        self, key: Hashable, timeout: float | None = None
    ) -> AsyncIterator[None]:
        """Hold the lock for ``key`` for the duration of the block.

        Args:
            key: Lock key
            timeout: Seconds to wait before giving up (defaults to
                ``default_timeout``)

        Raises:
            LockTimeoutError: If the lock is not acquired in time
        """
        wait = self.default_timeout if timeout is None else timeout
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            try:
                await asyncio.wait_for(lock.acquire(), timeout=wait)
            except asyncio.TimeoutError:
                logfire.warn("Lock wait timed out", key=str(key), timeout=wait)
                raise LockTimeoutError(str(key), wait) from None
            try:
                yield
            finally:
                lock.release()
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def is_locked(self, key: Hashable) -> bool:
        """Whether some task currently holds the lock for ``key``."""
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        """Number of keys currently held or awaited."""
        return len(self._locks)
