"""
Middleware for request context and logging
"""

import json
import re
import time
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import clear_request_context, get_logger, set_request_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

SENSITIVE_KEYS = {
    "password",
    "token",
    "api_key",
    "secret",
    "auth",
    "authorization",
    "access_token",
    "refresh_token",
    "key",
    "jwt",
    "session",
    "cookie",
    "credentials",
}

_OPERATION_RE = re.compile(r"\b(query|mutation)\s+(\w+)")
GRAPHQL_GET_PARAMS = {"query", "variables", "extensions"}


def sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    """Remove sensitive query parameters from logging."""
    sanitized = {}
    for key, value in params.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            sanitized[key] = "[REDACTED]"
        else:
            sanitized[key] = value
    return sanitized


def operation_name_from_payload(payload: dict[str, Any]) -> str | None:
    """Best-effort GraphQL operation name for a GET params dict or POST body."""
    op = payload.get("operationName")
    if isinstance(op, str) and op:
        return op

    query = payload.get("query", "")
    if not isinstance(query, str) or not query:
        return None
    if "__schema" in query or "IntrospectionQuery" in query:
        return "__introspection"

    match = _OPERATION_RE.search(query)
    if match:
        kind = "mutation:" if match.group(1) == "mutation" else ""
        return f"{kind}{match.group(2)}"
    return "unnamed_operation"


async def extract_graphql_operation_name(request: Request) -> str | None:
    if request.url.path != "/graphql":
        return None

    if request.method == "GET":
        return operation_name_from_payload(dict(request.query_params))

    if request.method == "POST":
        try:
            body = await request.body()
            if not body:
                return None
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
        if isinstance(data, dict):
            return operation_name_from_payload(data)

    return None


def _redacted_params(request: Request) -> dict[str, Any] | None:
    if not request.query_params:
        return None
    params = sanitize_query_params(dict(request.query_params))
    # GraphQL documents and variables sent over GET stay out of the logs
    if request.url.path == "/graphql":
        for key in GRAPHQL_GET_PARAMS.intersection(params):
            params[key] = "[REDACTED]"
    return params


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Binds a request id to every log line of a request and logs its outcome.

    The id is taken from the ``X-Request-ID`` header when the caller sends one
    and returned in the same header on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(request_id=request.headers.get(REQUEST_ID_HEADER))
        started = time.perf_counter()
        operation = await extract_graphql_operation_name(request)

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            query_params=_redacted_params(request),
            graphql_operation=operation,
            remote_addr=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                graphql_operation=operation,
                error=str(e),
            )
            raise
        else:
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                graphql_operation=operation,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_context()
