# 📄 File: migrations/env.py
# 🧭 Purpose (Layman Explanation):
# Tells Alembic how to reach the database and which tables the service expects, so schema
# changes can be applied safely in every environment.
# 🧪 Purpose (Technical Summary):
# Alembic environment: loads every module's ORM models into DatabaseBase.metadata and runs
# migrations offline or online over the async engine.
# 🔗 Dependencies:
# - alembic (migration tool)
# - SQLAlchemy async engine (asyncpg)
# - python-dotenv (environment variables)
# 🔄 Connected Modules / Calls From:
# - alembic CLI commands (upgrade, downgrade, revision)

import asyncio
import os
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

from plant_health_api.shared.config.database import DatabaseBase
from plant_health_api.shared.infrastructure.database.connection import load_models

load_dotenv()

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

load_models()
target_metadata = DatabaseBase.metadata

exclude_tables = config.get_main_option("exclude_tables", "")


def get_database_url() -> str:
    """DATABASE_URL from the environment, falling back to alembic.ini."""
    return os.getenv("DATABASE_URL") or config.get_main_option("sqlalchemy.url")


def include_object(object, name, type_, reflected, compare_to):
    if type_ == "table" and name in exclude_tables.split(","):
        return False
    return True


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Emits SQL to the script output without a DBAPI connection.
    """
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        include_object=include_object,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = get_database_url()

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
