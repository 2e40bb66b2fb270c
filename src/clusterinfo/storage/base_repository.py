# src/clusterinfo/storage/base_repository.py
from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.application import Application, ApplicationId


class ApplicationRepository(ABC):
    """
    Abstract base class for application record repositories.
    Defines the contract for listing, reading and writing application records.
    """

    @abstractmethod
    async def list_applications(self) -> List[Application]:
        """
        Retrieves all known applications with their deployments.

        Returns:
            A list of Application objects.
        """
        pass

    @abstractmethod
    async def get_application(self, application_id: ApplicationId) -> Optional[Application]:
        """
        Retrieves a single application.

        Args:
            application_id: The identity of the application.

        Returns:
            The Application, or None if not found.
        """
        pass

    @abstractmethod
    async def write_application(self, application: Application) -> None:
        """
        Writes an application and all its deployments, replacing any stored version.

        Raises:
            StorageError: If the record cannot be written.
        """
        pass

    @abstractmethod
    async def delete_application(self, application_id: ApplicationId) -> bool:
        """
        Deletes an application and its deployments.

        Returns:
            True if a record was deleted.
        """
        pass
