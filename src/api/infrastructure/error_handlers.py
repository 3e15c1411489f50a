"""Global exception handlers.

Every non-2xx response carries a JSON body of the form
``{"detail": "<message>"}``. Request validation failures, including
malformed JSON bodies and non-integer path IDs, are reported as 400
instead of FastAPI's default 422.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from infrastructure.observability import (
    DefaultRequestErrorProbe,
    ObservationContext,
    RequestErrorProbe,
)


def describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    """Turn pydantic error entries into one human-readable sentence.

    The ``loc`` prefix (body, path, query) is kept so clients can tell a
    bad path parameter from a bad body field.
    """
    if not errors:
        return "Invalid request"

    messages = []
    for error in errors:
        if error.get("type") == "json_invalid":
            messages.append("Request body is not valid JSON")
            continue
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


def register_exception_handlers(
    app: FastAPI, probe: RequestErrorProbe | None = None
) -> None:
    """Install the JSON error handlers on an application.

    Args:
        app: The FastAPI application
        probe: Optional domain probe for observability
    """
    probe = probe or DefaultRequestErrorProbe()

    def _scoped(request: Request) -> RequestErrorProbe:
        return probe.with_context(ObservationContext.from_request(request))

    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        detail = describe_validation_errors(list(exc.errors()))
        _scoped(request).request_rejected(detail)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": detail},
        )

    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code >= 500:
            _scoped(request).request_failed(exc.status_code, str(exc.detail))
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        _scoped(request).unhandled_exception(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
