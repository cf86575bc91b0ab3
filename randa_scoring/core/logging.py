"""Centralised logging configuration (structlog over stdlib logging)."""
import logging
import sys

import structlog

from randa_scoring.config import Settings

_configured = False


def configure_logging(settings: Settings) -> None:
    """Configure structlog and the root logger once per process."""
    global _configured
    if _configured:
        return

    level = getattr(logging, settings.LOG_LEVEL)
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_FORMAT == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True
