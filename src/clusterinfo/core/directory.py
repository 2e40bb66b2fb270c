# src/clusterinfo/core/directory.py
"""
The application directory: the only way the reconciliation loop reads,
locks and writes application records.
"""

import logging
from typing import AsyncContextManager, List, Optional

from ..models.application import Application, ApplicationId
from ..storage.base_repository import ApplicationRepository
from .exceptions import LockError
from .locks import ApplicationLock, ApplicationLockRegistry

logger = logging.getLogger(__name__)


class ApplicationDirectory:
    """Lists, locks and stores application records."""

    def __init__(self, repository: ApplicationRepository, locks: Optional[ApplicationLockRegistry] = None):
        self.repository = repository
        self.locks = locks or ApplicationLockRegistry()

    async def list_applications(self) -> List[Application]:
        return await self.repository.list_applications()

    async def get_application(self, application_id: ApplicationId) -> Optional[Application]:
        return await self.repository.get_application(application_id)

    def lock(self, application_id: ApplicationId) -> AsyncContextManager[ApplicationLock]:
        """Return a context manager holding the update lock of an application."""
        return self.locks.lock(application_id)

    async def store(self, application: Application, lock: ApplicationLock) -> None:
        """
        Commits an application record.

        Raises:
            LockError: If `lock` is not a held lock for this application.
            StorageError: If the repository fails to write the record.
        """
        if not lock.guards(application.id):
            raise LockError(f"Refusing to store {application.id} without holding its lock (got {lock!r})")
        await self.repository.write_application(application)
        logger.debug("Stored application %s", application.id)
