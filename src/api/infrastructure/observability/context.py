"""Request-scoped metadata for domain probes.

A probe bound to an ObservationContext adds the context's fields to every
event it emits, so log lines written while serving one request can be
correlated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from starlette.requests import Request

REQUEST_ID_HEADER = "x-request-id"


@dataclass(frozen=True)
class ObservationContext:
    """Immutable metadata describing the request being served.

    Attributes:
        request_id: Caller-supplied X-Request-ID, if any.
        method: HTTP method of the request.
        path: URL path of the request.
    """

    request_id: str | None = None
    method: str | None = None
    path: str | None = None

    @classmethod
    def from_request(cls, request: Request) -> ObservationContext:
        """Build a context from an incoming HTTP request."""
        return cls(
            request_id=request.headers.get(REQUEST_ID_HEADER),
            method=request.method,
            path=request.url.path,
        )

    def as_dict(self) -> dict[str, Any]:
        """Return the fields to log, leaving out unset ones."""
        return {
            key: value
            for key, value in (
                ("request_id", self.request_id),
                ("method", self.method),
                ("path", self.path),
            )
            if value is not None
        }
