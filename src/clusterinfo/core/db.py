# src/clusterinfo/core/db.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

import aiosqlite

from .config import config
from .exceptions import ConnectionError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Manages the single persistent connection to the SQLite database.
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_type = config.DB_TYPE
        self.db_path = db_path or config.DB_PATH
        self.connection: Optional[aiosqlite.Connection] = None

    async def connect(self):
        """
        Establishes a connection to the configured database and makes sure the schema exists.
        """
        if self.db_type != "sqlite":
            raise ValueError("Unsupported database type specified in config.")
        try:
            self.connection = await aiosqlite.connect(self.db_path)
            await self.connection.execute("PRAGMA foreign_keys = ON")
            logger.info("Successfully connected to SQLite database.")
        except Exception as e:
            logger.error(f"Could not connect to the database: {e}")
            raise ConnectionError(f"Could not connect to {self.db_path}: {e}") from e
        await self.setup_sqlite()

    @asynccontextmanager
    async def connection_scope(self):
        """
        Yields the single persistent connection, connecting first if needed.
        """
        if self.connection is None:
            await self.connect()
        yield self.connection

    async def close(self):
        if self.connection is not None:
            await self.connection.close()
            self.connection = None
            logger.info("Database connection closed.")

    async def setup_sqlite(self):
        """
        Creates the necessary tables for SQLite if they don't exist.
        """
        if self.connection is None:
            logger.error("Cannot setup SQLite, no connection available.")
            return

        # --- Table for applications ---
        await self.connection.execute("""
            CREATE TABLE IF NOT EXISTS applications (
                application_id TEXT PRIMARY KEY,
                tenant TEXT NOT NULL,
                application TEXT NOT NULL,
                instance TEXT NOT NULL
            );
        """)

        # --- Table for deployments ---
        await self.connection.execute("""
            CREATE TABLE IF NOT EXISTS deployments (
                application_id TEXT NOT NULL REFERENCES applications(application_id) ON DELETE CASCADE,
                zone TEXT NOT NULL,
                cluster_info TEXT NOT NULL DEFAULT '{}',
                cluster_info_updated_at TEXT,
                PRIMARY KEY (application_id, zone)
            );
        """)

        await self.connection.commit()
        logger.info("SQLite schema is up to date.")


# Singleton instance of the DatabaseManager
db_manager = DatabaseManager()
