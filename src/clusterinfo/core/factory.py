# src/clusterinfo/core/factory.py
"""
Factory functions to instantiate the repository, the application directory
and a fully wired ClusterInfoReconciler.
"""

import logging
from functools import lru_cache

from ..collectors.flavor_catalog_collector import FlavorCatalogCollector
from ..collectors.inventory_collector import InventoryCollector
from ..storage.base_repository import ApplicationRepository
from ..storage.sqlite_application_repository import SQLiteApplicationRepository
from .config import config
from .directory import ApplicationDirectory
from .locks import ApplicationLockRegistry
from .reconciler import ClusterInfoReconciler

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_application_repository() -> ApplicationRepository:
    """
    Factory function to get the application repository based on config.
    Uses lru_cache to act as a singleton.
    """
    if config.DB_TYPE == "sqlite":
        logger.info("Using SQLite application repository.")
        from .db import db_manager

        return SQLiteApplicationRepository(db_manager)
    raise NotImplementedError(f"Repository for DB_TYPE '{config.DB_TYPE}' not implemented.")


@lru_cache(maxsize=1)
def get_directory() -> ApplicationDirectory:
    """
    The process-wide application directory. A single instance is required so
    every caller shares the same lock registry.
    """
    return ApplicationDirectory(
        get_application_repository(),
        ApplicationLockRegistry(timeout_seconds=config.LOCK_TIMEOUT_SECONDS),
    )


def get_reconciler() -> ClusterInfoReconciler:
    """Builds a reconciler wired to the configured inventory, catalog file and directory."""
    return ClusterInfoReconciler(
        directory=get_directory(),
        inventory=InventoryCollector(),
        catalogs=FlavorCatalogCollector(),
        max_concurrency=config.RECONCILE_MAX_CONCURRENCY,
    )
