"""Structured logging setup.

Loggers returned by :func:`get_logger` always sit on top of stdlib
``logging``, so the emitter stays silent until the host application
configures a handler (or calls :func:`configure_logging`).
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from param_emitter.config.settings import get_settings

PACKAGE_LOGGER = "param_emitter"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def configure_logging(level: str | None = None) -> None:
    """Configure structlog and stdlib logging for console output.

    Args:
        level: Log level name. Defaults to ``EmitterSettings.log_level``.
    """
    level_name = (level or get_settings().log_level).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    logging.basicConfig(format="%(message)s", level=numeric_level)
    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger wrapping the stdlib logger *name*."""
    return structlog.wrap_logger(
        logging.getLogger(name or PACKAGE_LOGGER),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
