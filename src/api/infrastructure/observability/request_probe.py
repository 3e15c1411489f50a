"""Domain probe for request failures surfaced by the global error handlers.

The handlers bind each probe to the request's ObservationContext, so the
method, path and request id appear on every event without being passed
to the individual calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class RequestErrorProbe(Protocol):
    """Domain probe for rejected and failed requests."""

    def request_rejected(self, reason: str) -> None:
        """Record that a request failed validation (400)."""
        ...

    def request_failed(self, status_code: int, detail: str) -> None:
        """Record that a handler returned a server error (5xx)."""
        ...

    def unhandled_exception(self, error: Exception) -> None:
        """Record that a handler raised an unexpected exception."""
        ...

    def with_context(self, context: ObservationContext) -> RequestErrorProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRequestErrorProbe:
    """Default implementation of RequestErrorProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultRequestErrorProbe:
        """Create a new probe with observation context bound."""
        return DefaultRequestErrorProbe(logger=self._logger, context=context)

    def request_rejected(self, reason: str) -> None:
        self._logger.info(
            "request_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def request_failed(self, status_code: int, detail: str) -> None:
        self._logger.warning(
            "request_failed",
            status_code=status_code,
            detail=detail,
            **self._get_context_kwargs(),
        )

    def unhandled_exception(self, error: Exception) -> None:
        self._logger.error(
            "unhandled_exception",
            error_type=type(error).__name__,
            exc_info=error,
            **self._get_context_kwargs(),
        )
