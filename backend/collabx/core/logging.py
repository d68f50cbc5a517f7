"""
Structured logging for CollabX.

Every module logs through ``get_logger(__name__)`` with an event name and
key/value context, e.g. ``logger.info("join_request_decided", outcome=...)``.
Debug mode renders coloured console lines; otherwise one JSON object per line.
"""

import logging
import sys
import uuid
from typing import Any

import structlog
from collabx.core.settings import settings

SERVICE_NAME = "collabx-backend"


def _add_service_context(logger: Any, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def _stringify_ids(logger: Any, method_name: str, event_dict: dict) -> dict:
    # Project and request primary keys are UUIDs; the JSON renderer cannot encode them
    for key, value in event_dict.items():
        if isinstance(value, uuid.UUID):
            event_dict[key] = str(value)
    return event_dict


def _resolve_level() -> int:
    if settings.log_level:
        return logging.getLevelName(settings.log_level.upper())
    return logging.DEBUG if settings.app_debug else logging.INFO


def configure_logging() -> None:
    """Configure structlog and route stdlib logging through the same stream."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _stringify_ids,
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.app_debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            _add_service_context,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=_resolve_level())

    for noisy in ("uvicorn.access", "sqlalchemy.engine", "slowapi"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
