"""
Database connection manager module.

Provides the DatabaseManager class that owns the process-wide MongoDB client
(and therefore its connection pool). One instance is created by the
application lifespan and shared through ``app.state``.
"""

from __future__ import annotations

import logging
from datetime import UTC
from typing import Any

import certifi
from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

import config

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Manage the MongoDB client and database connection.

    This class handles:
    - Connection pooling and lifecycle management
    - Beanie ODM initialization for the document models
    - Health checks for the status endpoint

    Environment Variables (via ``config``):
        MONGODB_URI: MongoDB connection string
        MONGODB_DATABASE: Database name (default: journey_log)
        MONGODB_MAX_POOL_SIZE: Connection pool size (default: 50)
        MONGODB_SERVER_SELECTION_TIMEOUT_MS: Server selection timeout (default: 10000)
    """

    def __init__(
        self,
        mongo_uri: str | None = None,
        db_name: str | None = None,
        *,
        max_pool_size: int | None = None,
        server_selection_timeout_ms: int | None = None,
    ) -> None:
        self._mongo_uri = mongo_uri or config.MONGODB_URI
        self._db_name = db_name or config.MONGODB_DATABASE
        self._max_pool_size = max_pool_size or config.MONGODB_MAX_POOL_SIZE
        self._server_selection_timeout_ms = (
            server_selection_timeout_ms or config.MONGODB_SERVER_SELECTION_TIMEOUT_MS
        )
        self._client: AsyncIOMotorClient | None = None
        self._db: AsyncIOMotorDatabase | None = None
        self._beanie_initialized = False

        logger.debug(
            "Database configuration initialized with pool size %s",
            self._max_pool_size,
        )

    def _initialize_client(self) -> None:
        """
        Initialize the MongoDB client with proper connection settings.

        Raises:
            Exception: If client initialization fails.
        """
        try:
            client_kwargs: dict[str, Any] = {
                "tz_aware": True,
                "tzinfo": UTC,
                "maxPoolSize": self._max_pool_size,
                "minPoolSize": 0,
                "maxIdleTimeMS": 60000,
                "serverSelectionTimeoutMS": self._server_selection_timeout_ms,
                "appname": "JourneyLog",
            }

            # Configure TLS for MongoDB Atlas connections
            if self._mongo_uri.startswith("mongodb+srv://"):
                client_kwargs.update(tls=True, tlsCAFile=certifi.where())

            self._client = AsyncIOMotorClient(self._mongo_uri, **client_kwargs)
            self._db = self._client[self._db_name]
            logger.info("MongoDB client initialized for database '%s'", self._db_name)

        except Exception:
            logger.exception("Failed to initialize MongoDB client")
            raise

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """
        Get the database instance, initializing if necessary.

        Raises:
            RuntimeError: If database cannot be initialized.
        """
        if self._db is None:
            self._initialize_client()
        if self._db is None:
            msg = "Database instance could not be initialized."
            raise RuntimeError(msg)
        return self._db

    @property
    def client(self) -> AsyncIOMotorClient:
        """Get the client instance, initializing if necessary."""
        if self._client is None:
            self._initialize_client()
        if self._client is None:
            msg = "MongoDB client could not be initialized."
            raise RuntimeError(msg)
        return self._client

    async def init_beanie(self) -> None:
        """
        Bind the Beanie document models to this database.

        Beanie creates the declared indexes as part of initialization.
        """
        if self._beanie_initialized:
            logger.debug("Beanie already initialized, skipping")
            return

        from db.models import ALL_DOCUMENT_MODELS

        await init_beanie(database=self.db, document_models=ALL_DOCUMENT_MODELS)
        self._beanie_initialized = True
        logger.info(
            "Beanie ODM initialized with %d document models",
            len(ALL_DOCUMENT_MODELS),
        )

    async def ping(self) -> bool:
        """Return True when the server answers a ping."""
        try:
            await self.client.admin.command("ping")
        except Exception as e:
            logger.warning("MongoDB ping failed: %s", e)
            return False
        return True

    async def cleanup_connections(self) -> None:
        """Close MongoDB client connections."""
        if self._client:
            try:
                logger.info("Closing MongoDB client connections...")
                self._client.close()
            finally:
                self._client = None
                self._db = None
                self._beanie_initialized = False
                logger.info("MongoDB client state reset")
