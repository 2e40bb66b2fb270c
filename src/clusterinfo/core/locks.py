# src/clusterinfo/core/locks.py
"""
Per-application update locks.

Every write to an application record must happen while holding the lock of
that application. Locks are process local and handed out by a registry so
that concurrent ticks, or concurrent workers inside one tick, never
interleave writes to the same record.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncIterator, Dict, Optional

from ..models.application import ApplicationId
from .exceptions import LockTimeoutError

logger = logging.getLogger(__name__)


class ApplicationLock:
    """Token proving that the lock of one application is held."""

    def __init__(self, application_id: ApplicationId):
        self.application_id = application_id
        self.held = True

    def guards(self, application_id: ApplicationId) -> bool:
        return self.held and self.application_id == application_id

    def __repr__(self) -> str:
        return f"ApplicationLock({self.application_id}, held={self.held})"


class ApplicationLockRegistry:
    """Hands out one asyncio.Lock per application id.

    An entry lives only while some caller holds or waits for it, so the
    registry does not grow with every application ever seen.
    """

    def __init__(self, timeout_seconds: Optional[float] = None):
        self.timeout_seconds = timeout_seconds
        self._locks: Dict[ApplicationId, asyncio.Lock] = {}
        self._users: Dict[ApplicationId, int] = {}

    def _checkout(self, application_id: ApplicationId) -> asyncio.Lock:
        lock = self._locks.get(application_id)
        if lock is None:
            lock = self._locks[application_id] = asyncio.Lock()
        self._users[application_id] = self._users.get(application_id, 0) + 1
        return lock

    def _checkin(self, application_id: ApplicationId) -> None:
        remaining = self._users[application_id] - 1
        if remaining:
            self._users[application_id] = remaining
        else:
            del self._users[application_id]
            del self._locks[application_id]

    def __len__(self) -> int:
        return len(self._locks)

    def is_locked(self, application_id: ApplicationId) -> bool:
        lock = self._locks.get(application_id)
        return lock is not None and lock.locked()

    async def _acquire(self, lock: asyncio.Lock) -> bool:
        waiter = asyncio.ensure_future(lock.acquire())
        acquired = False
        try:
            await asyncio.wait({waiter}, timeout=self.timeout_seconds)
            acquired = waiter.done() and not waiter.cancelled()
        finally:
            if not acquired:
                # An acquire that completes after we gave up must not keep the lock.
                waiter.cancel()
                waiter.add_done_callback(partial(_release_abandoned, lock))
        return acquired

    @asynccontextmanager
    async def lock(self, application_id: ApplicationId) -> AsyncIterator[ApplicationLock]:
        """Acquire the lock of an application for the duration of the block.

        Raises:
            LockTimeoutError: If the lock is not acquired within the registry timeout.
        """
        lock = self._checkout(application_id)
        try:
            if not await self._acquire(lock):
                raise LockTimeoutError(
                    f"Timed out after {self.timeout_seconds}s waiting for the lock of {application_id}"
                )

            token = ApplicationLock(application_id)
            logger.debug("Acquired lock for %s", application_id)
            try:
                yield token
            finally:
                token.held = False
                lock.release()
                logger.debug("Released lock for %s", application_id)
        finally:
            self._checkin(application_id)


def _release_abandoned(lock: asyncio.Lock, waiter: asyncio.Future) -> None:
    if not waiter.cancelled() and waiter.exception() is None:
        lock.release()
