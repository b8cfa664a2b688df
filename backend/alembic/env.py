"""
Alembic Migration Environment
===============================

What:  Runs migrations against the async engine configured in pictweet.config.
How:   The URL comes from settings (not alembic.ini); online migrations use
       an async engine and hand a sync connection to Alembic via run_sync().
       When DB_SCHEMA is set, the version table lives in that schema too.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from pictweet.config import settings
from pictweet.database import Base
import pictweet.models  # noqa: F401  (registers every table on Base.metadata)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

config.set_main_option("sqlalchemy.url", settings.database_url)


def _schema_options() -> dict:
    if not settings.schema_name:
        return {}
    return {
        "version_table_schema": settings.schema_name,
        "include_schemas": True,
    }


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_schema_options(),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    if settings.schema_name and connection.dialect.name == "postgresql":
        # The version table is created inside the schema before revision 001 runs.
        connection.exec_driver_sql(f'CREATE SCHEMA IF NOT EXISTS "{settings.schema_name}"')
        connection.commit()

    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        **_schema_options(),
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
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
