"""
Mars Photo API: FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers and
       returns the app. A module-level `app` is built for uvicorn.
Who:   uvicorn (`uvicorn mars_photos.main:app`) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware:  Request ID → Logging → GZip → CORS         │
    │                                                          │
    │  Routes:                                                 │
    │    GET /health                                           │
    │    GET /api/v1/rovers[/{id}[/photos|/latest_photos]]     │
    │    GET /api/v1/manifests/{id}                            │
    │    GET /api/v1/photos/{id}                               │
    │                                                          │
    │  Exception Handlers (body is always {"errors": ...}):    │
    │    ValidationError → 400   NotSupportedError → 501       │
    │    UpstreamError   → 500   anything else     → 500       │
    └──────────────────────────────────────────────────────────┘

The service is stateless. There is nothing to open at startup and
nothing to close at shutdown beyond logging; HTTP clients live for the
duration of a single request (see http_client.py).
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from mars_photos import __version__
from mars_photos.config import settings
from mars_photos.exceptions import (
    MarsPhotosError,
    NotSupportedError,
    UpstreamError,
    ValidationError,
)
from mars_photos.middleware.logging import RequestLoggingMiddleware
from mars_photos.middleware.request_id import RequestIDMiddleware, request_id_var
from mars_photos.routes import health, manifests, photos, rovers

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An internal error occurred. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] mars_photos.services.rover_service: message

    httpx and httpcore log every upstream request at INFO. A single rover
    listing makes dozens of them, so they are raised to WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Mars Photo API %s starting up...", __version__)
    logger.info("Curiosity feed: %s", settings.curiosity_api_url)
    logger.info("Perseverance feed: %s", settings.perseverance_api_url)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Mars Photo API shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"errors": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map domain exceptions to HTTP status codes.

    Handler hierarchy:
        ValidationError         → 400 (message returned verbatim)
        RequestValidationError  → 400 (bad query parameter type or range)
        NotSupportedError       → 501 (message names the rover)
        UpstreamError           → 500 (generic message, context logged)
        MarsPhotosError (base)  → 500
        Exception (fallback)    → 500 (stack trace logged, never returned)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return _error_response(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = str(first.get("loc", ("", "parameter"))[-1])
            message = f"Invalid {field}. {first.get('msg', 'Invalid value')}"
        else:
            message = "Invalid request parameters"
        logger.warning("[%s] Request validation error: %s", rid, message)
        return _error_response(400, message)

    @app.exception_handler(NotSupportedError)
    async def handle_not_supported(request: Request, exc: NotSupportedError):
        rid = request_id_var.get("")
        logger.info("[%s] Unsupported rover requested: %s", rid, exc.rover_name)
        return _error_response(501, exc.message)

    @app.exception_handler(UpstreamError)
    async def handle_upstream_error(request: Request, exc: UpstreamError):
        rid = request_id_var.get("")
        logger.error("[%s] Upstream error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(500, GENERIC_SERVER_ERROR)

    @app.exception_handler(MarsPhotosError)
    async def handle_app_error(request: Request, exc: MarsPhotosError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(500, GENERIC_SERVER_ERROR)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error_response(500, GENERIC_SERVER_ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Mars Rover Photo API",
        description=(
            "Proxy over NASA's live raw-image feeds that answers in the shape of "
            "the classic Mars Rover Photos API. Photo totals are estimates."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Middleware ────────────────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID runs first.
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Exception Handlers ────────────────────────────────────────────────
    register_exception_handlers(app)

    # ── Routes ────────────────────────────────────────────────────────────
    app.include_router(rovers.router)
    app.include_router(manifests.router)
    app.include_router(photos.router)
    app.include_router(health.router)

    return app


app = create_app()
