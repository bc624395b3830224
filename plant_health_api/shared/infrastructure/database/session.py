# 📄 File: plant_health_api/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Hands out short "conversations" with the database so each piece of work either
# saves everything it changed or nothing at all.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy session factory with commit-or-rollback context managers, used by
# application handlers as their unit of work and exposed as a FastAPI dependency.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - plant_health_api.shared.infrastructure.database.connection (engine)
# - plant_health_api.shared.core.exceptions (DatabaseError)
#
# 🔄 Connected Modules / Calls From:
# - Command and query handlers of every module
# - plant_health_api.main (startup)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from plant_health_api.shared.core.exceptions import DatabaseError
from plant_health_api.shared.infrastructure.database.connection import get_database_engine

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """
    Manages database sessions with transaction handling and automatic cleanup.
    """

    def __init__(self):
        self._session_factory: Optional[async_sessionmaker] = None

    def initialize(self) -> None:
        """Bind the session factory to the initialized engine."""
        self._session_factory = async_sessionmaker(
            get_database_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=True,
        )
        logger.info("Database session factory initialized")

    def reset(self) -> None:
        self._session_factory = None

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session with automatic transaction management.

        Commits when the block exits normally and rolls back otherwise.
        SQLAlchemy failures surface as DatabaseError; application exceptions
        propagate unchanged after the rollback.

        Yields:
            AsyncSession: Database session

        Raises:
            DatabaseError: If the session manager is not initialized or the
                database rejects the transaction
        """
        if self._session_factory is None:
            raise DatabaseError("Session manager not initialized")

        session: AsyncSession = self._session_factory()
        try:
            yield session
            await session.commit()
        except exc.SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error occurred, transaction rolled back: {e}")
            raise DatabaseError(f"Database operation failed: {e}") from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    @property
    def is_initialized(self) -> bool:
        return self._session_factory is not None


# Global session manager instance
session_manager = DatabaseSessionManager()


def initialize_sessions() -> None:
    """Initialize the global database session manager."""
    session_manager.initialize()


def get_session_manager() -> DatabaseSessionManager:
    """FastAPI dependency returning the global session manager."""
    return session_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a request scoped database session.

    Usage:
        @router.get("/ready")
        async def ready(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with session_manager.get_session() as session:
        yield session
