"""Database engine creation for async SQLAlchemy.

This module provides the factory for the application's async engine, which
owns the process-wide connection pool, using asyncpg as the driver.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "create_engine",
    "build_async_url",
    "describe_url",
]

_ASYNC_DRIVER = "postgresql+asyncpg"
_POSTGRES_SCHEMES = {"postgres", "postgresql", "postgresql+asyncpg", "postgresql+psycopg2"}


def create_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create the async engine shared by all requests.

    The pool is strictly bounded: requests beyond ``pool_size`` wait for a
    free connection for at most ``pool_timeout`` seconds, after which
    SQLAlchemy raises ``sqlalchemy.exc.TimeoutError``.

    Args:
        settings: Database connection settings

    Returns:
        Configured async engine
    """
    return create_async_engine(
        build_async_url(settings),
        pool_size=settings.pool_size,
        max_overflow=0,  # No overflow - strict pool limit
        pool_timeout=settings.pool_timeout,
        pool_pre_ping=True,  # Verify connections before using
        echo=False,
    )


def build_async_url(settings: DatabaseSettings) -> URL:
    """Build the asyncpg URL from DATABASE_URL.

    Accepts the ``postgres://`` and ``postgresql://`` forms commonly handed
    out by hosting providers and rewrites the driver to asyncpg. Credentials
    keep SQLAlchemy's percent-encoding.

    Args:
        settings: Database connection settings

    Returns:
        URL object using the postgresql+asyncpg driver

    Raises:
        ValueError: If the URL is unparsable or not a PostgreSQL URL
    """
    try:
        url = make_url(settings.url.get_secret_value())
    except ArgumentError as e:
        raise ValueError("DATABASE_URL is not a valid database URL") from e

    if url.drivername not in _POSTGRES_SCHEMES:
        raise ValueError(
            f"Unsupported database scheme '{url.drivername}', expected PostgreSQL"
        )

    return url.set(drivername=_ASYNC_DRIVER)


def describe_url(url: URL) -> str:
    """Render a URL for logging with the password masked."""
    return url.render_as_string(hide_password=True)
