"""
Request logging middleware.

Binds a request id, the route and the caller's uid into structlog's
contextvars so every log line emitted while serving the request carries them,
then logs one summary line per request.
"""

import time
import uuid
from typing import Callable, Optional

import jwt
import structlog
from collabx.core.logging import get_logger
from collabx.core.security import decode_access_token
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Probes and docs are not worth a log line each
QUIET_PATHS = {"/health", "/health/ready", "/docs", "/redoc", "/openapi.json"}


def _caller_uid(request: Request) -> Optional[str]:
    """Best-effort uid for log context; authorization happens in the routers."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    try:
        return decode_access_token(token).get("sub")
    except jwt.PyJWTError:
        return None


def _project_id_from_path(path: str) -> Optional[str]:
    # /api/projects/{project_id}/...
    _, marker, rest = path.partition("/projects/")
    if not marker:
        return None
    candidate = rest.split("/", 1)[0]
    return candidate if candidate and candidate != "my" else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request with its status and duration and echoes its request id."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
        )
        uid = _caller_uid(request)
        if uid:
            structlog.contextvars.bind_contextvars(user_id=uid)
        project_id = _project_id_from_path(path)
        if project_id:
            structlog.contextvars.bind_contextvars(project_id=project_id)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        if path not in QUIET_PATHS:
            if response.status_code >= 500:
                log = logger.error
            elif response.status_code >= 400:
                log = logger.warning
            else:
                log = logger.info
            log("request_completed", status_code=response.status_code, duration_ms=duration_ms)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
