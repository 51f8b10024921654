"""
Mars Photo API: Request Logging Middleware
============================================

What:  One access log line per request.
How:   Times the downstream call and, once routing has run, reads the
       matched route template and the `rover_id` path parameter from the
       ASGI scope so lines group by endpoint and rover rather than by raw URL.

Example:
    GET /api/v1/rovers/{rover_id}/photos rover=curiosity ?sol=1000 200 812.4ms [a1b2c3d4]

Rover listings and manifests sample up to twenty sols per rover, so they
are slow by nature. Anything slower than SLOW_REQUEST_MS is raised to
WARNING even when it succeeded. /health is never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from mars_photos.middleware.request_id import request_id_var

logger = logging.getLogger("mars_photos.access")

SKIP_PATHS = frozenset({"/health"})
SLOW_REQUEST_MS = 5000.0


def _level_for(status: int, duration_ms: float) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400 or duration_ms >= SLOW_REQUEST_MS:
        return logging.WARNING
    return logging.INFO


def _route_template(request: Request) -> str:
    """Matched route path (e.g. /api/v1/manifests/{rover_id}), or the raw path."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        # Routing has filled in the shared scope by now
        rover_id = request.path_params.get("rover_id")
        route = _route_template(request)
        query = request.url.query
        rid = request_id_var.get("")

        logger.log(
            _level_for(response.status_code, duration_ms),
            "%s %s%s%s %d %.1fms [%s]",
            request.method,
            route,
            f" rover={rover_id.lower()}" if rover_id else "",
            f" ?{query}" if query else "",
            response.status_code,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "route": route,
                "rover_id": rover_id,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else None,
            },
        )
        return response
