"""Domain probe for user application service operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user use cases."""

    def user_created(self, user_id: int, email: str) -> None:
        """Record that a user was created."""
        ...

    def user_updated(self, user_id: int, fields: list[str]) -> None:
        """Record that a user was updated."""
        ...

    def user_deleted(self, user_id: int) -> None:
        """Record that a user was deleted."""
        ...

    def invalid_user_input(self, operation: str, reason: str) -> None:
        """Record that a request was rejected before reaching the database."""
        ...

    def user_store_unavailable(
        self, operation: str, error: Exception, user_id: int | None = None
    ) -> None:
        """Record that the database failed to serve an operation."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def user_created(self, user_id: int, email: str) -> None:
        """Record that a user was created."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def user_updated(self, user_id: int, fields: list[str]) -> None:
        """Record that a user was updated."""
        self._logger.info(
            "user_updated",
            user_id=user_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: int) -> None:
        """Record that a user was deleted."""
        self._logger.info(
            "user_deleted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def invalid_user_input(self, operation: str, reason: str) -> None:
        """Record that a request was rejected before reaching the database."""
        self._logger.info(
            "invalid_user_input",
            operation=operation,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def user_store_unavailable(
        self, operation: str, error: Exception, user_id: int | None = None
    ) -> None:
        """Record that the database failed to serve an operation.

        Only the exception type and message are logged; statements and
        bound parameters stay out of the log.
        """
        self._logger.error(
            "user_store_unavailable",
            operation=operation,
            user_id=user_id,
            error_type=type(error).__name__,
            error=str(error).splitlines()[0] if str(error) else "",
            **self._get_context_kwargs(),
        )
