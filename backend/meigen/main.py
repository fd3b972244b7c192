"""
Meigen Backend — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers;
       uvicorn serves the module-level `app` (uvicorn meigen.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────────┐
    │                        FastAPI App                           │
    │                                                              │
    │  Middleware:  LoginRateLimit → RequestID → Logging → GZip    │
    │               → CORS                                         │
    │                                                              │
    │  Routes:      /api/login  /api/categories  /api/subcategories│
    │               /api/authors  /api/quotes  /api/search         │
    │               /api/daily-quotes  /api/cron/daily-quotes      │
    │               /health                                        │
    │                                                              │
    │  Exception handlers render every failure as                  │
    │      {"success": false, "error": {"code", "message"}}        │
    └──────────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   logging, configuration check (logged, not fatal)
    Shutdown:  dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from meigen import __version__
from meigen.config import settings
from meigen.database import dispose_engine
from meigen.exceptions import MeigenError
from meigen.middleware.logging import RequestLoggingMiddleware
from meigen.middleware.login_rate_limit import LoginRateLimitMiddleware
from meigen.middleware.request_id import RequestIDMiddleware, request_id_var
from meigen.routes import (
    auth,
    authors,
    categories,
    daily_quotes,
    health,
    quotes,
    search,
    subcategories,
)
from meigen.schemas.common import error_response

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """Configure the root logger once, to stdout, at LOG_LEVEL."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Meigen backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # keep serving: reads work, login/cron answer INTERNAL_ERROR
        logger.error("Configuration error: %s", e)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Meigen backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

HTTP_STATUS_CODES = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "NOT_FOUND",
    409: "CONFLICT",
}


def code_for_http_status(status: int) -> str:
    """Closest envelope code for a framework-raised HTTP status."""
    if status >= 500:
        return "INTERNAL_ERROR"
    return HTTP_STATUS_CODES.get(status, "VALIDATION_ERROR")


def describe_validation_error(exc: RequestValidationError) -> str:
    """First schema error as `location: message`, e.g. `body.name: Field required`."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "Invalid value")
    return f"{loc}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map every failure onto the error envelope.

        MeigenError              → its own code and status
        RequestValidationError   → VALIDATION_ERROR 400 (bad body, path or query)
        StarletteHTTPException   → closest code, original status (unknown route → 404)
        Exception                → INTERNAL_ERROR 500, stack trace logged only
    """

    @app.exception_handler(MeigenError)
    async def handle_meigen_error(request: Request, exc: MeigenError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, exc.code, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, exc.code, exc.message)
        return error_response(exc.code, exc.message, status=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = describe_validation_error(exc)
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), message)
        return error_response("VALIDATION_ERROR", message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(
            code_for_http_status(exc.status_code),
            str(exc.detail),
            status=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=True)
        return error_response("INTERNAL_ERROR", "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Meigen API",
        description=(
            "Curated quotations with authors, categories and subcategories, "
            "a daily featured selection, and password-gated admin editing."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Last added runs first: LoginRateLimit → RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(LoginRateLimitMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(categories.router)
    app.include_router(subcategories.router)
    app.include_router(authors.router)
    app.include_router(quotes.router)
    app.include_router(search.router)
    app.include_router(daily_quotes.router)
    app.include_router(health.router)

    return app


app = create_app()
