"""
ScaffoldAI - HTTP Middleware
Request id propagation, response timing and access logging
"""

import time
from typing import Callable, FrozenSet
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.logging_config import (
    logger,
    set_request_id,
    generate_request_id,
)


# Docs and health checks are not worth an access log line
QUIET_PATHS: FrozenSet[str] = frozenset({
    "/",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/api/v1/health",
    "/api/v1/ai/health",
})

# Generation calls routinely take several seconds, so only flag the outliers
SLOW_REQUEST_MS = 30000


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id and logs its outcome.

    The id comes from an incoming X-Request-ID header when present. It is
    stored in the logging context for the duration of the request and echoed
    back together with X-Response-Time.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)
        method, path = request.method, request.url.path
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.log_error_with_context(
                exc,
                context=f"{method} {path}",
                duration_ms=(time.perf_counter() - started) * 1000,
            )
            raise
        finally:
            set_request_id("")

        duration_ms = (time.perf_counter() - started) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

        if path not in QUIET_PATHS:
            logger.log_request(method, path, response.status_code, duration_ms, request_id=request_id)
            logger.log_performance(f"{method} {path}", duration_ms, threshold_ms=SLOW_REQUEST_MS)

        return response
