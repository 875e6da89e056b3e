"""Runtime startup/shutdown utilities for the application process."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from db.manager import DatabaseManager
from db.store import JourneyStore

logger = logging.getLogger(__name__)


async def initialize_runtime(app: FastAPI, db_manager: DatabaseManager) -> None:
    """Connect to MongoDB, bind Beanie, and publish shared objects on ``app.state``."""
    await db_manager.init_beanie()
    app.state.db_manager = db_manager
    app.state.journey_store = JourneyStore()
    logger.info("Database initialized; journey store ready.")


async def shutdown_runtime(app: FastAPI) -> None:
    """Release the MongoDB connection pool."""
    db_manager: DatabaseManager | None = getattr(app.state, "db_manager", None)
    if db_manager is not None:
        await db_manager.cleanup_connections()
    app.state.journey_store = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """FastAPI lifespan: one connection pool for the life of the process."""
    try:
        await initialize_runtime(app, DatabaseManager())
    except Exception:
        logger.critical("Failed to initialize application during startup", exc_info=True)
        raise

    yield

    await shutdown_runtime(app)
    logger.info("Application shutdown completed successfully")
