# src/clusterinfo/api/routers/config.py
"""
API routes for exposing non-sensitive configuration and version information.
"""

from fastapi import APIRouter

from ... import __version__
from ...core.config import config
from ..schemas import ConfigResponse, HealthResponse, VersionResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@router.get("/version", response_model=VersionResponse)
async def version():
    """Return the current application version."""
    return VersionResponse(version=__version__)


@router.get("/config", response_model=ConfigResponse)
async def get_config():
    """Return non-sensitive configuration values.

    The inventory token and URL are never exposed.
    """
    return ConfigResponse(
        db_type=config.DB_TYPE,
        log_level=config.LOG_LEVEL,
        reconcile_interval=config.RECONCILE_INTERVAL,
        reconcile_max_concurrency=config.RECONCILE_MAX_CONCURRENCY,
        inventory_fetch_timeout_seconds=config.INVENTORY_FETCH_TIMEOUT_SECONDS,
        lock_timeout_seconds=config.LOCK_TIMEOUT_SECONDS,
        flavor_catalog_path=config.FLAVOR_CATALOG_PATH,
        api_host=config.API_HOST,
        api_port=config.API_PORT,
    )
