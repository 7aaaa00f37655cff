"""
Logging setup for Roomchat: structlog over the standard library
"""

import logging
import secrets
import sys
from contextvars import ContextVar
from typing import Any

import structlog

# Per-request values merged into every event
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)

SERVICE_NAME = "roomchat"

# AWS SDK loggers flood DEBUG output with wire dumps
_QUIET_LOGGERS = ("botocore", "aiobotocore", "boto3", "urllib3")


def add_request_context(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor attaching the current request id and username."""
    request_id = request_id_ctx.get()
    if request_id:
        event_dict.setdefault("request_id", request_id)

    user_id = user_id_ctx.get()
    if user_id:
        event_dict.setdefault("user_id", user_id)

    return event_dict


def add_service(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure structlog and the root stdlib logger.

    Args:
        debug: Render colored console output instead of JSON lines
        level: Log level name; DEBUG when ``debug`` is set, INFO otherwise
    """
    level_name = (level or ("DEBUG" if debug else "INFO")).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s", force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    renderer: Any = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_service,
            add_request_context,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Short random URL-safe id for requests that arrive without one."""
    return secrets.token_urlsafe(12)


def set_request_context(request_id: str | None = None, user_id: str | None = None) -> str:
    """Start the logging context of a request and return its request id."""
    request_id = request_id or generate_request_id()
    request_id_ctx.set(request_id)
    user_id_ctx.set(user_id)
    return request_id


def bind_user(user_id: str | None) -> None:
    """Attach the authenticated username to the current request context."""
    user_id_ctx.set(user_id)


def clear_request_context() -> None:
    request_id_ctx.set(None)
    user_id_ctx.set(None)
