"""Structlog configuration for the application.

Events are rendered as colored console lines for development and as one
JSON object per line in production. LOG_LEVEL sets the minimum level.
"""

import logging
import os
import sys

import structlog


def _wants_console(log_format: str | None) -> bool:
    """Decide between console and JSON output.

    An explicit LOG_FORMAT wins; otherwise FORCE_COLOR or a TTY on stdout
    selects the console renderer.
    """
    if log_format is not None:
        return log_format == "console"
    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def _min_level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: str = "info", log_format: str | None = None) -> None:
    """Configure structlog processors, renderer and level filtering.

    Args:
        level: Minimum level name (debug, info, warning, error, critical)
        log_format: "console", "json", or None to auto-detect
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if _wants_console(log_format):
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_min_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
