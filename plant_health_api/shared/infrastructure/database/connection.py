# 📄 File: plant_health_api/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Opens and looks after the connection to the database, checks that it is still answering,
# and shuts it down cleanly when the service stops.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine lifecycle manager with health checks, schema creation for
# development/test setups, and module level helpers used by the application lifespan.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncEngine)
# - plant_health_api.shared.config (settings, DatabaseBase, engine kwargs)
#
# 🔄 Connected Modules / Calls From:
# - plant_health_api.shared.infrastructure.database.session (session factory)
# - plant_health_api.main (startup / shutdown)
# - plant_health_api.api.v1.health (readiness probe)

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from plant_health_api.shared.config.database import DatabaseBase, build_engine_kwargs
from plant_health_api.shared.config.settings import get_settings

logger = logging.getLogger(__name__)


def load_models() -> None:
    """Import every module's ORM models so they register on DatabaseBase.metadata."""
    from plant_health_api.modules.ai_assistant.infrastructure.database import models as _chat  # noqa: F401
    from plant_health_api.modules.plant_detection.infrastructure.database import models as _detection  # noqa: F401
    from plant_health_api.modules.user_management.infrastructure.database import models as _users  # noqa: F401


class DatabaseConnectionManager:
    """
    Owns the process wide async engine.

    An already built engine can be handed to initialize(), which is how
    tests point the service at a throwaway database.
    """

    def __init__(self):
        self._engine: Optional[AsyncEngine] = None
        self._health_check_query = text("SELECT 1")
        self._retry_attempts = 3
        self._retry_delay = 0.5

    async def initialize(self, engine: Optional[AsyncEngine] = None) -> None:
        """Create the engine from settings unless one is supplied."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        if engine is not None:
            self._engine = engine
            logger.info(f"Database engine attached: {engine.url.render_as_string(hide_password=True)}")
            return

        settings = get_settings()
        logger.info("Initializing database connection pool...")
        self._engine = create_async_engine(settings.DATABASE_URL, **build_engine_kwargs(settings))
        logger.info(
            f"Database engine created for "
            f"{self._engine.url.render_as_string(hide_password=True)}"
        )

    async def create_tables(self) -> None:
        """Create every mapped table that does not exist yet."""
        if self._engine is None:
            raise RuntimeError("Database engine not initialized")

        load_models()
        async with self._engine.begin() as conn:
            await conn.run_sync(DatabaseBase.metadata.create_all)
        logger.info("Database tables ensured")

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check and return structured status.
        """
        if self._engine is None:
            return {
                "status": "unhealthy",
                "error": "Database engine not initialized",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

        last_error = None
        for attempt in range(self._retry_attempts):
            try:
                async with self._engine.connect() as conn:
                    await conn.execute(self._health_check_query)
                return {
                    "status": "healthy",
                    "timestamp": datetime.now(timezone.utc).isoformat()
                }
            except Exception as e:
                last_error = e
                logger.warning(
                    f"Database health check failed (attempt {attempt + 1}/{self._retry_attempts}): {e}"
                )
                if attempt < self._retry_attempts - 1:
                    await asyncio.sleep(self._retry_delay * (2 ** attempt))

        logger.error("Database health check failed after all retry attempts")
        return {
            "status": "unhealthy",
            "error": str(last_error),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    async def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            logger.info("Database connections closed")

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None


# Global connection manager instance
db_manager = DatabaseConnectionManager()


async def init_database(create_tables: bool = False) -> None:
    """Initialize the global engine, optionally creating missing tables."""
    await db_manager.initialize()
    if create_tables:
        await db_manager.create_tables()


async def close_database() -> None:
    await db_manager.close()


def get_database_engine() -> AsyncEngine:
    """Return the initialized engine or fail loudly."""
    if db_manager.engine is None:
        raise RuntimeError("Database engine not initialized")
    return db_manager.engine
