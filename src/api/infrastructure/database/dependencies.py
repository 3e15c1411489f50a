"""Database dependency injection for FastAPI.

The engine and its sessionmaker are created once by the application
lifespan and attached to ``app.state``. Dependencies read them from the
request's application instead of module-level globals, so tests can mount
the routers on an app carrying an isolated engine.
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to the application engine.

    Sessions do not auto-commit. Callers manage transactions explicitly
    using ``async with session.begin()``.
    """
    return async_sessionmaker(
        engine,
        expire_on_commit=False,
        class_=AsyncSession,
    )


def get_engine(request: Request) -> AsyncEngine:
    """Return the engine attached to the running application.

    Raises:
        RuntimeError: If the lifespan has not initialized the database
    """
    engine: AsyncEngine | None = getattr(request.app.state, "engine", None)
    if engine is None:
        raise RuntimeError(
            "Database engine not initialized. Ensure app startup completed successfully."
        )
    return engine


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for one request (FastAPI dependency).

    The session borrows a pooled connection when first used and returns it
    when the request finishes. If the request is cancelled mid-flight, the
    context manager rolls back any open transaction.

    Usage:
        @router.post("/users")
        async def create_user(
            session: AsyncSession = Depends(get_session)
        ):
            async with session.begin():
                ...

    Yields:
        AsyncSession for database operations
    """
    sessionmaker: async_sessionmaker[AsyncSession] | None = getattr(
        request.app.state, "sessionmaker", None
    )
    if sessionmaker is None:
        raise RuntimeError(
            "Database sessionmaker not initialized. Ensure app startup completed successfully."
        )

    async with sessionmaker() as session:
        yield session
