"""Domain probe for user repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations."""

    def user_inserted(self, user_id: int) -> None:
        """Record that a user row was inserted."""
        ...

    def user_retrieved(self, user_id: int) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, user_id: int) -> None:
        """Record that a user was not found."""
        ...

    def users_listed(self, count: int) -> None:
        """Record that all users were listed."""
        ...

    def user_row_updated(self, user_id: int, fields: list[str]) -> None:
        """Record that a user row was updated."""
        ...

    def user_row_deleted(self, user_id: int) -> None:
        """Record that a user row was deleted."""
        ...

    def duplicate_email(self, email: str) -> None:
        """Record that the email unique constraint rejected a write."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_inserted(self, user_id: int) -> None:
        self._logger.debug(
            "user_inserted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: int) -> None:
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: int) -> None:
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def users_listed(self, count: int) -> None:
        self._logger.debug(
            "users_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def user_row_updated(self, user_id: int, fields: list[str]) -> None:
        self._logger.debug(
            "user_row_updated",
            user_id=user_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def user_row_deleted(self, user_id: int) -> None:
        self._logger.debug(
            "user_row_deleted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def duplicate_email(self, email: str) -> None:
        self._logger.warning(
            "duplicate_email",
            email=email,
            **self._get_context_kwargs(),
        )
