"""
Albums API — FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() opens the shared store handle, registers
       middleware, exception handlers and routes, and returns the app.
Who:   uvicorn (`uvicorn albums_api.main:app`) or the `albums-api` script (run()).
When:  Once at process start; the returned app serves every request.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → Errors → GZip  │
    │               → CORS                                │
    │                                                     │
    │  Routes:      /albums  /albums/{id}  /albumsPost    │
    │               /albumsPut/{id}  /albumsDelete/{id}   │
    │               /albumsCreate  /albumsUpdate/{id}     │
    │               /health                               │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError → 400 text │ NotFound → 404 text │
    │    fatal class → 500 JSON (+ SIGTERM if FAIL_FAST)  │
    │    anything else → 500 JSON via the Errors layer    │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    create_app(): build the engine (no connection yet) and the AlbumService
    Startup:      configure logging, optionally create the album table
    Shutdown:     dispose the engine
"""

import logging
import os
import signal
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.background import BackgroundTask
from starlette.responses import Response

from albums_api import __version__
from albums_api.config import Settings
from albums_api.config import settings as default_settings
from albums_api.database import (
    build_engine,
    build_session_factory,
    create_tables,
    dispose_engine,
)
from albums_api.exceptions import (
    AlbumServiceError,
    DatabaseError,
    MalformedRequestError,
    is_fatal,
    status_for,
)
from albums_api.middleware.errors import UnexpectedErrorMiddleware
from albums_api.middleware.logging import RequestLoggingMiddleware
from albums_api.middleware.request_id import RequestIDMiddleware, request_id_var
from albums_api.routes import albums, health
from albums_api.services.album_service import AlbumService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once at startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Create the album table if DB_CREATE_TABLES is set
        3. Log the listening address

    Shutdown:
        1. Dispose the shared engine
    """
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)

    if settings.db_create_tables:
        await create_tables(app.state.engine)
        logger.info("Album table ensured")

    if settings.fail_fast:
        logger.warning("FAIL_FAST is on: fatal request errors will stop the server")

    logger.info("Server started on port %d", settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Albums API shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def terminate_process() -> None:
    """Ask the server to stop, as the fail-fast policy requires."""
    logger.critical("Fatal request error with FAIL_FAST enabled; terminating process")
    os.kill(os.getpid(), signal.SIGTERM)


def _error_code(exc: BaseException) -> str:
    if isinstance(exc, DatabaseError):
        return "database_error"
    if isinstance(exc, MalformedRequestError):
        return "malformed_request"
    return "internal_server_error"


def client_error_response(exc: AlbumServiceError) -> Response:
    """400/404 body: the message as plain text."""
    return PlainTextResponse(
        exc.message + "\n",
        status_code=status_for(exc),
        headers={"X-Content-Type-Options": "nosniff"},
    )


def fatal_error_response(exc: BaseException, settings: Settings) -> Response:
    """500 JSON body; schedules process termination after sending when FAIL_FAST is on."""
    rid = request_id_var.get("")
    if isinstance(exc, MalformedRequestError):
        message = exc.message
    else:
        message = "An internal error occurred. Please try again later."

    background = BackgroundTask(terminate_process) if settings.fail_fast else None
    return JSONResponse(
        status_code=status_for(exc),
        content={
            "error": _error_code(exc),
            "message": message,
            "request_id": rid,
        },
        background=background,
    )


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """
    Map exceptions to responses through status_for().

    Handler hierarchy:
        ValidationError         → 400 plain text
        NotFoundError           → 404 plain text
        MalformedRequestError   → 500 JSON (fatal)
        DatabaseError           → 500 JSON (fatal)
        RequestValidationError  → treated as MalformedRequestError

    Any other exception is rendered by UnexpectedErrorMiddleware, inside the
    request-id middleware, so its 500 still carries X-Request-ID.

    Fatal responses never expose driver errors or stack traces; those are
    logged server-side.
    """

    @app.exception_handler(AlbumServiceError)
    async def handle_album_service_error(request: Request, exc: AlbumServiceError):
        rid = request_id_var.get("")
        if not is_fatal(exc):
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
            return client_error_response(exc)

        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return fatal_error_response(exc, settings)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """A body that does not decode into an album is a fatal-class error."""
        rid = request_id_var.get("")
        error = MalformedRequestError(
            message="Malformed request body",
            context={"errors": exc.errors()},
        )
        logger.error("[%s] Malformed request body on %s %s: %s", rid, request.method, request.url.path, exc.errors())
        return fatal_error_response(error, settings)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration; defaults to the environment-loaded
                  singleton. Tests pass their own to point at a scratch store.

    Returns:
        A configured FastAPI instance with its store handle on app.state.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Albums API",
        description="CRUD service over a single album table.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Shared Store Handle ───────────────────────────────────────────────
    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.album_service = AlbumService(build_session_factory(engine))

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → UnexpectedError → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        UnexpectedErrorMiddleware,
        render=lambda exc: fatal_error_response(exc, settings),
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app, settings)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(albums.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `albums_api.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve the module-level app with uvicorn."""
    import uvicorn

    uvicorn.run(
        app,
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
