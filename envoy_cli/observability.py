"""structlog configuration for the CLI."""

import logging
import os
import sys

import structlog

LOG_LEVEL_ENV = "ENVOY_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging(log_level: str | None = None):
    """Configure structlog to write to stderr.

    Args:
        log_level: Overrides ENVOY_LOG_LEVEL (default WARNING)
    """
    log_level = (log_level or os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    log_format = os.getenv("LOG_FORMAT", "console").lower()  # json or console

    level = logging.getLevelName(log_level)
    if not isinstance(level, int):
        level = logging.WARNING

    # Shared processors for all configurations
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    # The stream is bound here, so every invocation reconfigures against the current stderr.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    structlog.get_logger().debug("logging_configured", log_level=log_level, log_format=log_format)
