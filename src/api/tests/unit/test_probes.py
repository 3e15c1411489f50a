"""Unit tests for domain probes.

Tests that domain probes correctly capture domain events
following the Domain Oriented Observability pattern.
"""

from dataclasses import fields
from unittest.mock import MagicMock

import structlog

from infrastructure.observability import (
    DefaultRequestErrorProbe,
    DefaultStartupProbe,
    ObservationContext,
)
from infrastructure.observability.probes import DefaultConnectionProbe
from users.application.observability import DefaultUserServiceProbe
from users.infrastructure.observability import DefaultUserRepositoryProbe


def _logger():
    return MagicMock(spec=structlog.stdlib.BoundLogger)


class TestConnectionProbe:
    """Tests for ConnectionProbe protocol and implementation."""

    def test_default_probe_creates_with_default_logger(self):
        """Default probe should work without explicit logger."""
        probe = DefaultConnectionProbe()
        assert probe._logger is not None

    def test_default_probe_accepts_custom_logger(self):
        """Default probe should accept a custom logger."""
        mock_logger = _logger()
        probe = DefaultConnectionProbe(logger=mock_logger)
        assert probe._logger is mock_logger

    def test_engine_created_logs_pool_settings(self):
        mock_logger = _logger()
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.engine_created(
            url="postgresql+asyncpg://u:***@h/db", pool_size=10, pool_timeout=30.0
        )

        mock_logger.info.assert_called_once_with(
            "database_engine_created",
            url="postgresql+asyncpg://u:***@h/db",
            pool_size=10,
            pool_timeout=30.0,
        )

    def test_connection_failed_logs_error(self):
        """connection_failed should log error with host, database, and error."""
        mock_logger = _logger()
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.connection_failed(
            host="localhost", database="testdb", error=Exception("Connection refused")
        )

        mock_logger.error.assert_called_once_with(
            "database_connection_failed",
            host="localhost",
            database="testdb",
            error="Connection refused",
        )

    def test_engine_disposed_logs_without_request_fields(self):
        mock_logger = _logger()
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.engine_disposed()

        mock_logger.info.assert_called_once_with("database_engine_disposed")


class TestUserServiceProbe:
    """Tests for UserServiceProbe."""

    def test_user_created_logs_info(self):
        mock_logger = _logger()
        probe = DefaultUserServiceProbe(logger=mock_logger)

        probe.user_created(user_id=1, email="alice@example.com")

        mock_logger.info.assert_called_once_with(
            "user_created", user_id=1, email="alice@example.com"
        )

    def test_store_unavailable_logs_first_line_only(self):
        mock_logger = _logger()
        probe = DefaultUserServiceProbe(logger=mock_logger)
        error = Exception("connection refused\n[SQL: INSERT INTO users ...]")

        probe.user_store_unavailable("create_user", error)

        mock_logger.error.assert_called_once_with(
            "user_store_unavailable",
            operation="create_user",
            user_id=None,
            error_type="Exception",
            error="connection refused",
        )

    def test_request_context_is_logged(self):
        mock_logger = _logger()
        context = ObservationContext(request_id="req-2", method="PUT", path="/users/1")
        probe = DefaultUserServiceProbe(logger=mock_logger).with_context(context)

        probe.invalid_user_input("update_user", "name must not be empty")

        mock_logger.info.assert_called_once_with(
            "invalid_user_input",
            operation="update_user",
            reason="name must not be empty",
            request_id="req-2",
            method="PUT",
            path="/users/1",
        )


class TestUserRepositoryProbe:
    """Tests for UserRepositoryProbe."""

    def test_row_events_log_at_debug(self):
        mock_logger = _logger()
        probe = DefaultUserRepositoryProbe(logger=mock_logger)

        probe.user_inserted(5)
        probe.user_row_deleted(5)

        assert mock_logger.debug.call_count == 2
        mock_logger.info.assert_not_called()

    def test_duplicate_email_logs_warning(self):
        mock_logger = _logger()
        probe = DefaultUserRepositoryProbe(logger=mock_logger)

        probe.duplicate_email("alice@example.com")

        mock_logger.warning.assert_called_once()


class TestRequestErrorProbe:
    """Tests for RequestErrorProbe."""

    def test_unhandled_exception_includes_traceback(self):
        mock_logger = _logger()
        probe = DefaultRequestErrorProbe(logger=mock_logger)
        error = RuntimeError("boom")

        probe.unhandled_exception(error)

        assert mock_logger.error.call_args.kwargs["exc_info"] is error


class TestStartupProbe:
    """Tests for StartupProbe."""

    def test_settings_invalid_logs_error(self):
        mock_logger = _logger()
        probe = DefaultStartupProbe(logger=mock_logger)

        probe.settings_invalid("DATABASE_URL missing")

        mock_logger.error.assert_called_once()


class TestObservationContext:
    """Tests for ObservationContext."""

    def test_as_dict_skips_unset_fields(self):
        context = ObservationContext(method="GET")

        assert context.as_dict() == {"method": "GET"}

    def test_carries_only_request_fields(self):
        assert [f.name for f in fields(ObservationContext)] == [
            "request_id",
            "method",
            "path",
        ]

    def test_from_request(self):
        request = MagicMock()
        request.headers = {"x-request-id": "abc-123"}
        request.method = "DELETE"
        request.url.path = "/users/3"

        context = ObservationContext.from_request(request)

        assert context.as_dict() == {
            "request_id": "abc-123",
            "method": "DELETE",
            "path": "/users/3",
        }

    def test_request_probe_logs_request_fields(self):
        mock_logger = _logger()
        context = ObservationContext(request_id="r", method="PUT", path="/users/1")
        probe = DefaultRequestErrorProbe(logger=mock_logger).with_context(context)

        probe.request_rejected("body.name: Field required")

        mock_logger.info.assert_called_once_with(
            "request_rejected",
            reason="body.name: Field required",
            request_id="r",
            method="PUT",
            path="/users/1",
        )
