"""Unit tests for structlog configuration."""

import logging

import pytest
import structlog

from infrastructure.logging import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def _renderer():
    return structlog.get_config()["processors"][-1]


def test_json_format():
    configure_logging("info", "json")

    assert isinstance(_renderer(), structlog.processors.JSONRenderer)


def test_console_format():
    configure_logging("info", "console")

    assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)


def test_level_filters_debug(capsys):
    configure_logging("warning", "json")
    logger = structlog.get_logger()

    logger.info("hidden_event")
    logger.warning("shown_event")

    out = capsys.readouterr().out
    assert "hidden_event" not in out
    assert "shown_event" in out


def test_unknown_level_falls_back_to_info():
    configure_logging("chatty", "json")

    wrapper = structlog.get_config()["wrapper_class"]
    assert wrapper is structlog.make_filtering_bound_logger(logging.INFO)
