"""
Logging setup.

Every module logs through structlog. Records carry an ISO timestamp, the
level, and the id of the HTTP request being served when there is one, so all
lines of a single job save or report run can be grepped together.
"""

import contextvars
import logging
import sys
import uuid
from typing import Any

import structlog

from .config import settings

_request_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default=""
)


def add_correlation_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    request_id = _request_id.get()
    if request_id:
        event_dict.setdefault("correlation_id", request_id)
    return event_dict


def _renderer() -> Any:
    if settings.LOG_FORMAT == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")


def setup_structured_logging() -> None:
    """Configure structlog and route stdlib loggers (SQLAlchemy, uvicorn) to stdout."""
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_correlation_id,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    # SQL echo is opt-in; the request middleware already logs each request.
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.LOG_SQL else logging.WARNING
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Tag subsequent log records of this context; a new id is made when none is given."""
    correlation_id = correlation_id or uuid.uuid4().hex
    _request_id.set(correlation_id)
    return correlation_id
