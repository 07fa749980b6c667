# functions_client/utils/logging_conf.py
from __future__ import annotations

import logging

import structlog


def configure_logging(log_level: str = "INFO") -> None:
    """
    Opt-in structlog setup for applications embedding the client.

    The library itself only calls structlog.get_logger(); nothing is
    configured on import.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
