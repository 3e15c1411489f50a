"""Unit tests for the global exception handlers."""

from unittest.mock import MagicMock

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from infrastructure.error_handlers import (
    describe_validation_errors,
    register_exception_handlers,
)


class TestDescribeValidationErrors:
    """Tests for describe_validation_errors."""

    def test_json_invalid(self):
        errors = [{"type": "json_invalid", "loc": ("body", 12), "msg": "JSON"}]

        assert describe_validation_errors(errors) == "Request body is not valid JSON"

    def test_joins_locations_and_messages(self):
        errors = [
            {"type": "missing", "loc": ("body", "name"), "msg": "Field required"},
            {"type": "int_parsing", "loc": ("path", "user_id"), "msg": "bad int"},
        ]

        assert describe_validation_errors(errors) == (
            "body.name: Field required; path.user_id: bad int"
        )

    def test_no_errors(self):
        assert describe_validation_errors([]) == "Invalid request"


def _app(probe) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app, probe=probe)

    @app.get("/items/{item_id}")
    def read_item(item_id: int) -> dict:
        if item_id == 0:
            raise HTTPException(status_code=503, detail="down")
        if item_id == 1:
            raise RuntimeError("secret internals")
        return {"id": item_id}

    return app


class TestRegisteredHandlers:
    """Tests for the handlers installed by register_exception_handlers."""

    def test_validation_error_is_400(self):
        probe = MagicMock()
        client = TestClient(_app(probe))

        response = client.get("/items/abc")

        assert response.status_code == 400
        assert response.json()["detail"].startswith("path.item_id:")
        probe.with_context.return_value.request_rejected.assert_called_once()

    def test_server_http_error_is_logged(self):
        probe = MagicMock()
        client = TestClient(_app(probe))

        response = client.get("/items/0")

        assert response.status_code == 503
        assert response.json() == {"detail": "down"}
        probe.with_context.return_value.request_failed.assert_called_once_with(
            503, "down"
        )
        context = probe.with_context.call_args[0][0]
        assert context.method == "GET"
        assert context.path == "/items/0"

    def test_unhandled_error_hides_details(self):
        probe = MagicMock()
        client = TestClient(_app(probe), raise_server_exceptions=False)

        response = client.get("/items/1")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        assert "secret" not in response.text
        probe.with_context.return_value.unhandled_exception.assert_called_once()
