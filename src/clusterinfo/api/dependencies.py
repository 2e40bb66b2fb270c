# src/clusterinfo/api/dependencies.py
"""
FastAPI dependency injection functions.

These functions provide repository instances to API route handlers via
FastAPI's Depends() mechanism, keeping the API layer decoupled from
concrete implementations.
"""

from ..storage.base_repository import ApplicationRepository


async def get_application_repository() -> ApplicationRepository:
    """Provides the ApplicationRepository instance via the factory."""
    from ..core.factory import get_application_repository as factory_get_repo

    return factory_get_repo()
