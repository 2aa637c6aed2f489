# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Per-key asyncio locks.

Registrations for the same event are funnelled through one critical
section so the capacity count and the insert cannot interleave within a
process. Across processes the event row lock taken inside the
registration transaction does the same job on PostgreSQL.
"""

import asyncio
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager


class LockTimeoutError(Exception):
    """Raised when a keyed lock could not be acquired in time."""

    pass


class KeyedLockRegistry:
    """Registry handing out one asyncio.Lock per key.

    Locks are created lazily and dropped once nobody holds or waits
    for them, so the registry does not grow with the number of events.

    Attributes:
        timeout: Seconds to wait for a lock before giving up.
    """

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._waiters: dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        """Hold the lock for key for the duration of the block.

        Args:
            key: Lock key, e.g. an event id.

        Raises:
            LockTimeoutError: If the lock is not acquired within timeout.
        """
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            try:
                await asyncio.wait_for(lock.acquire(), timeout=self.timeout)
            except asyncio.TimeoutError as e:
                raise LockTimeoutError(f"Timed out waiting for lock {key!r}") from e
            try:
                yield
            finally:
                lock.release()
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]
