"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class ConnectionProbe(Protocol):
    """Domain probe for database engine and connection observability.

    This probe captures domain-significant events related to the engine
    lifecycle and schema bootstrap without exposing logging details.
    """

    def engine_created(self, url: str, pool_size: int, pool_timeout: float) -> None:
        """Record that the async engine (and its pool) was created."""
        ...

    def engine_disposed(self) -> None:
        """Record that the engine was disposed and its connections closed."""
        ...

    def connection_established(self, host: str, database: str) -> None:
        """Record that a database connection was successfully established."""
        ...

    def connection_failed(self, host: str, database: str, error: Exception) -> None:
        """Record that a database connection attempt failed."""
        ...

    def schema_ensured(self, tables: list[str]) -> None:
        """Record that the startup schema is in place."""
        ...

    def schema_failed(self, error: Exception) -> None:
        """Record that applying the startup schema failed."""
        ...


class DefaultConnectionProbe:
    """Default implementation of ConnectionProbe using structlog.

    Engine and schema events happen outside any request, so this probe
    carries no observation context.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def engine_created(self, url: str, pool_size: int, pool_timeout: float) -> None:
        """Record that the async engine (and its pool) was created."""
        self._logger.info(
            "database_engine_created",
            url=url,
            pool_size=pool_size,
            pool_timeout=pool_timeout,
        )

    def engine_disposed(self) -> None:
        """Record that the engine was disposed and its connections closed."""
        self._logger.info("database_engine_disposed")

    def connection_established(self, host: str, database: str) -> None:
        """Record that a database connection was successfully established."""
        self._logger.info(
            "database_connection_established",
            host=host,
            database=database,
        )

    def connection_failed(self, host: str, database: str, error: Exception) -> None:
        """Record that a database connection attempt failed."""
        self._logger.error(
            "database_connection_failed",
            host=host,
            database=database,
            error=str(error),
        )

    def schema_ensured(self, tables: list[str]) -> None:
        """Record that the startup schema is in place."""
        self._logger.info(
            "schema_ensured",
            tables=tables,
        )

    def schema_failed(self, error: Exception) -> None:
        """Record that applying the startup schema failed."""
        self._logger.error(
            "schema_failed",
            error=str(error),
        )
