# src/clusterinfo/api/app.py
"""
FastAPI application factory for the cluster info API.

Uses the factory pattern so the app can be created with or without
lifespan management (e.g., tests skip DB initialization).
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .. import __version__
from ..core.config import config
from .routers import applications
from .routers import config as config_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown."""
    logger.info("🚀 Starting cluster info API...")
    from ..core.db import db_manager

    await db_manager.connect()
    logger.info("✅ Database connection established.")
    yield
    logger.info("🛑 Shutting down cluster info API...")
    await db_manager.close()


def create_app(use_lifespan: bool = False) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        use_lifespan: If True, attach the lifespan handler that manages
                      database connections. Set to False for testing.
    """
    app = FastAPI(
        title="Cluster Info API",
        description="Per-deployment cluster topology, hardware shape and cost, refreshed from the node inventory.",
        version=__version__,
        docs_url="/api/v1/docs",
        openapi_url="/api/v1/openapi.json",
        lifespan=lifespan if use_lifespan else None,
    )

    app.include_router(applications.router, prefix="/api/v1", tags=["Applications"])
    app.include_router(config_router.router, prefix="/api/v1", tags=["Config"])

    return app


def main():
    """Entry point for the clusterinfo-api console script."""
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    app = create_app(use_lifespan=True)
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
