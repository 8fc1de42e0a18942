"""
releaseplan.core.logging - Structured Logging Setup
=====================================================

Every module logs through ``structlog.get_logger()`` with snake_case event
names and key/value context. Nothing is configured at import time; the host
process (a build script, a CI step) calls ``configure_logging()`` once.

Usage:
    >>> from releaseplan.core.logging import configure_logging
    >>> configure_logging("DEBUG")
    >>> configure_logging("INFO", json_format=True)  # machine-readable CI logs
"""

from __future__ import annotations

import logging

import structlog


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Install the structlog processor chain on top of stdlib logging.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render events as JSON lines instead of the console
            renderer.

    Raises:
        ValueError: If ``level`` is not a known logging level name.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    processors: list = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(format="%(message)s", level=numeric_level, force=True)