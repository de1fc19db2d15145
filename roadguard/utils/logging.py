"""
structlog setup shared by the API, the record store and the workbook adapter.

Every event carries the service name and version; events emitted while a
request is in flight also carry its ``request_id`` through contextvars.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from roadguard import __version__
from roadguard.config import get_settings

SERVICE_NAME = "roadguard"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("uvicorn.access", "httpx")


def add_service_fields(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    event_dict["severity"] = method_name.upper()
    return event_dict


def _renderer(settings) -> Processor:
    if settings.dev_mode or settings.log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=not settings.testing)
    return structlog.processors.JSONRenderer()


def configure_logging() -> None:
    """
    Route stdlib logging to stdout and install the structlog pipeline.

    Safe to call more than once; the last call wins.
    """
    settings = get_settings()
    level = logging.getLevelName(settings.log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            add_service_fields,
            _renderer(settings),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Named structlog logger."""
    return structlog.get_logger(name)
