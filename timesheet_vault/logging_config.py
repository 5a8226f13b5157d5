"""
structlog setup for the console entry point.
"""

import logging
import sys

import structlog


def configure_logging(level: str = "WARNING") -> None:
    """
    Route structlog output to stderr through the console renderer.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...).
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        msg = f"Unknown log level: {level}"
        raise ValueError(msg)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
