# 📄 File: plant_health_api/shared/config/database.py
#
# 🧭 Purpose (Layman Explanation):
# Describes how the service talks to its database: which connection options to use
# and the common base that every stored table (users, detections, chat messages) builds on.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy declarative base with a constraint naming convention, plus engine keyword
# arguments derived from settings (pooled asyncpg in deployments, NullPool for SQLite).
#
# 🔗 Dependencies:
# - SQLAlchemy ORM / pool
# - plant_health_api.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - plant_health_api.shared.infrastructure.database.connection (engine creation)
# - All module ORM models (DatabaseBase)
# - migrations/env.py (target metadata)

from typing import Any, Dict

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from .settings import Settings


# =============================================================================
# DATABASE MODELS BASE CLASS
# =============================================================================

# Naming convention for database constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=convention)


class DatabaseBase(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Shares one metadata object so Alembic and test fixtures see every table.
    """
    metadata = metadata


# =============================================================================
# ENGINE CONFIGURATION
# =============================================================================

def build_engine_kwargs(settings: Settings) -> Dict[str, Any]:
    """
    Get SQLAlchemy engine configuration for the configured database.

    Args:
        settings: Application settings

    Returns:
        Dict of keyword arguments for create_async_engine
    """
    if settings.is_sqlite:
        return {
            "echo": settings.DB_ECHO,
            "poolclass": NullPool,
        }

    return {
        "echo": settings.DB_ECHO,
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "connect_args": {
            "server_settings": {
                "application_name": f"plant_health_{settings.ENVIRONMENT}",
                "timezone": "UTC",
                "jit": "off",
            },
            "command_timeout": 60,
        },
    }
