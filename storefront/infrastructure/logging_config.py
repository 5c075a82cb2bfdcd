"""Structured logging setup."""

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog for key-value console output.

    Args:
        level: Minimum log level name (e.g., "INFO", "DEBUG").
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        cache_logger_on_first_use=False,
    )
