"""
Bloglist Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers, routers and the
       database lifecycle; uvicorn serves the module-level `app`
       (uvicorn bloglist.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │  Middleware: RateLimit → RequestID → Logging → ...  │
    │  Routes: /api/blogs  /api/users  /api/login /health │
    │  Exception Handlers:                                │
    │    Validation/BadRequest→400  Unauthorized→401      │
    │    NotFound→404  RateLimit→429  Database→500        │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config check → Database.connect()
    Shutdown: Database.disconnect()
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from bloglist import __version__
from bloglist.config import settings
from bloglist.database import Database
from bloglist.exceptions import (
    BadRequestError,
    BloglistError,
    DatabaseError,
    NotFoundError,
    RateLimitExceededError,
    UnauthorizedError,
    ValidationError,
)
from bloglist.middleware.logging import RequestLoggingMiddleware
from bloglist.middleware.rate_limit import RateLimitMiddleware
from bloglist.middleware.request_id import RequestIDMiddleware, request_id_var
from bloglist.routes import blogs, health, login, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during startup, before anything else logs.
    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's; SQL echo only in DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def build_database() -> Database:
    return Database(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        echo=settings.log_level == "DEBUG",
    )


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Opens the database handle on startup and disposes it on shutdown.

    A handle injected through create_app(database=...) is reused; otherwise
    one is built from settings.
    """
    setup_logging()
    logger.info("Bloglist Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Still serve: local development runs on the default secret
        logger.warning("Configuration warning: %s", str(e))

    database: Optional[Database] = getattr(app.state, "database", None)
    if database is None:
        database = build_database()
        app.state.database = database
    await database.connect()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Bloglist Backend shutting down...")
    await database.disconnect()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    status_code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"error": message, "request_id": request_id_var.get("")}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and the `{"error": ...}` body.

    Handler hierarchy:
        ValidationError         → 400 (with details)
        BadRequestError         → 400
        RequestValidationError  → 400 (FastAPI body/param parsing)
        UnauthorizedError       → 401 (ForbiddenError included)
        NotFoundError           → 404
        RateLimitExceededError  → 429
        DatabaseError           → 500 (generic message)
        BloglistError (base)    → its status_code
        Exception (fallback)    → 500
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, exc.message, details=exc.context)

    @app.exception_handler(BadRequestError)
    async def handle_bad_request(request: Request, exc: BadRequestError):
        return _error_response(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Malformed bodies answer 400 like every other client error."""
        problems = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ())[1:])
            problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
        message = "; ".join(problems) or "malformed request"
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), message)
        return _error_response(400, message)

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        logger.info("[%s] Unauthorized: %s", request_id_var.get(""), exc.message)
        return _error_response(401, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, exc.message)

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return _error_response(
            429,
            exc.message,
            details=exc.context,
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(500, "An internal error occurred. Please try again later.")

    @app.exception_handler(BloglistError)
    async def handle_bloglist_error(request: Request, exc: BloglistError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace goes to the log only, never into the response."""
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return _error_response(500, "An unexpected error occurred.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: optional pre-built handle (tests pass an in-memory SQLite
                  one). Without it the lifespan builds one from settings.
    """
    app = FastAPI(
        title="Bloglist API",
        description="Blog posts with user accounts and bearer-token login.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    if database is not None:
        app.state.database = database

    # Middleware executes in REVERSE order of addition:
    # RateLimit → RequestID → Logging → GZip → CORS
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
    app.add_middleware(RateLimitMiddleware)

    register_exception_handlers(app)

    app.include_router(blogs.router)
    app.include_router(users.router)
    app.include_router(login.router)
    app.include_router(health.router)

    return app


app = create_app()
