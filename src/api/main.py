"""Main FastAPI application entry point."""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from typing import Annotated

import uvicorn
from fastapi import Depends, FastAPI, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from infrastructure.database.dependencies import create_sessionmaker, get_engine
from infrastructure.database.engines import build_async_url, create_engine, describe_url
from infrastructure.database.schema import ensure_schema, verify_connection
from infrastructure.error_handlers import register_exception_handlers
from infrastructure.logging import configure_logging
from infrastructure.observability import (
    ConnectionProbe,
    DefaultConnectionProbe,
    DefaultStartupProbe,
)
from infrastructure.settings import (
    DatabaseSettings,
    Settings,
    get_database_settings,
    get_settings,
)
from infrastructure.version import get_version
from users.presentation import router as users_router
from users.presentation.models import DatabaseHealthResponse, HealthResponse


@asynccontextmanager
async def database_lifespan(
    app: FastAPI,
    db_settings: DatabaseSettings,
    probe: ConnectionProbe | None = None,
):
    """Create the engine, verify it and expose it on ``app.state``.

    The engine is disposed on shutdown. Any failure before ``yield`` aborts
    application startup.
    """
    probe = probe or DefaultConnectionProbe()
    engine = create_engine(db_settings)
    probe.engine_created(
        url=describe_url(engine.url),
        pool_size=db_settings.pool_size,
        pool_timeout=db_settings.pool_timeout,
    )

    try:
        await verify_connection(engine, probe)
        if db_settings.auto_create_schema:
            await ensure_schema(engine, probe)

        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        yield
    finally:
        app.state.engine = None
        app.state.sessionmaker = None
        await engine.dispose()
        probe.engine_disposed()


def create_app(
    settings: Settings | None = None,
    db_settings: DatabaseSettings | None = None,
) -> FastAPI:
    """Build the application.

    Settings are resolved when the lifespan starts, so the app object can
    be created (and its routes exercised with overridden dependencies)
    without a DATABASE_URL in the environment.
    """
    startup_probe = DefaultStartupProbe()

    @asynccontextmanager
    async def users_api_lifespan(app: FastAPI):
        """Application lifespan context.

        Manages:
        - Logging configuration
        - Engine (connection pool) lifecycle and startup schema
        """
        app_settings = settings or get_settings()
        configure_logging(app_settings.log_level, app_settings.log_format)

        try:
            async with database_lifespan(app, db_settings or get_database_settings()):
                startup_probe.application_ready()
                yield
        except Exception as e:
            startup_probe.startup_failed(str(e))
            raise

        startup_probe.application_stopped()

    app = FastAPI(
        title="Users API",
        description="CRUD API over the users table",
        version=get_version(),
        lifespan=users_api_lifespan,
    )

    register_exception_handlers(app)

    app.include_router(users_router)

    @app.get("/")
    def health() -> HealthResponse:
        """Basic health check endpoint."""
        return HealthResponse(status="ok")

    @app.get(
        "/health/db",
        responses={503: {"model": DatabaseHealthResponse}},
    )
    async def health_db(
        response: Response,
        engine: Annotated[AsyncEngine, Depends(get_engine)],
    ) -> DatabaseHealthResponse:
        """Check database connection health.

        Returns 503 when a pooled connection cannot run ``SELECT 1``.
        """
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            return DatabaseHealthResponse(status="unavailable", connected=False)
        return DatabaseHealthResponse(status="ok", connected=True)

    return app


app = create_app()


def run() -> None:
    """Console entry point: load settings, then serve with uvicorn.

    Exits non-zero when configuration is invalid; uvicorn itself exits
    non-zero when the lifespan fails (database unreachable) or the port
    cannot be bound.
    """
    probe = DefaultStartupProbe()
    try:
        settings = get_settings()
        db_settings = get_database_settings()
        build_async_url(db_settings)
    except ValueError as e:
        configure_logging()
        probe.settings_invalid(str(e))
        sys.exit(1)

    configure_logging(settings.log_level, settings.log_format)
    probe.server_starting(settings.host, settings.port)

    uvicorn.run(
        create_app(settings, db_settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    run()
