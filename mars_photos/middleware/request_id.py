"""
Mars Photo API: Request ID Middleware
=======================================

What:  Assigns a short correlation id to each request and echoes it back
       in the X-Request-ID response header.
How:   Reuses a client-supplied X-Request-ID when present, otherwise
       generates one. The id is stored in a ContextVar so loggers and
       exception handlers can read it without the request object.

A single request to /api/v1/rovers fans out into dozens of upstream
calls. The id is what ties their warnings back to the request that
caused them.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local; concurrent requests share a thread.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag every request with a correlation id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
