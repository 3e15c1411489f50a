"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def server_starting(self, host: str, port: int) -> None:
        """Record that the HTTP listener is about to start."""
        ...

    def application_ready(self) -> None:
        """Record that the lifespan finished initializing the database."""
        ...

    def application_stopped(self) -> None:
        """Record that the lifespan finished shutting down."""
        ...

    def settings_invalid(self, error: str) -> None:
        """Record that configuration could not be loaded."""
        ...

    def startup_failed(self, error: str) -> None:
        """Record that the application could not start."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def server_starting(self, host: str, port: int) -> None:
        self._logger.info(
            "server_starting",
            host=host,
            port=port,
        )

    def application_ready(self) -> None:
        self._logger.info("application_ready")

    def application_stopped(self) -> None:
        self._logger.info("application_stopped")

    def settings_invalid(self, error: str) -> None:
        self._logger.error(
            "settings_invalid",
            error=error,
        )

    def startup_failed(self, error: str) -> None:
        self._logger.error(
            "startup_failed",
            error=error,
        )
