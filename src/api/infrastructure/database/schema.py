"""Startup connectivity check and idempotent schema creation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from infrastructure.database.exceptions import DatabaseConnectionError, SchemaError
from infrastructure.database.models import Base
from infrastructure.observability import ConnectionProbe, DefaultConnectionProbe

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine


async def verify_connection(
    engine: AsyncEngine, probe: ConnectionProbe | None = None
) -> None:
    """Run ``SELECT 1`` on a pooled connection.

    Raises:
        DatabaseConnectionError: If the database cannot be reached
    """
    probe = probe or DefaultConnectionProbe()
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        probe.connection_failed(
            host=engine.url.host or "",
            database=engine.url.database or "",
            error=e,
        )
        raise DatabaseConnectionError(f"Failed to connect to database: {e}") from e

    probe.connection_established(
        host=engine.url.host or "",
        database=engine.url.database or "",
    )


async def ensure_schema(
    engine: AsyncEngine, probe: ConnectionProbe | None = None
) -> None:
    """Create every mapped table that does not exist yet.

    ``create_all`` checks for each table first, so running it on every
    startup is safe. Deployments that manage the schema with alembic
    disable this through DB_AUTO_CREATE_SCHEMA.

    Raises:
        SchemaError: If the DDL cannot be applied
    """
    # Register table mappings on Base.metadata
    import users.infrastructure.models  # noqa: F401

    probe = probe or DefaultConnectionProbe()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        probe.schema_failed(error=e)
        raise SchemaError(f"Failed to apply schema: {e}") from e

    probe.schema_ensured(tables=sorted(Base.metadata.tables))
