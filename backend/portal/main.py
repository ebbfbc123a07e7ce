"""
Campus Portal Backend: FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() installs middleware and exception handlers, serves the
       root hint and the health check, and mounts every route group under
       the configured base path.
Who:   `python -m portal` / the `portal` script (through PortalServer), the tests.

Routes:
    GET /                     plaintext hint pointing at the health check
    GET {BASE}/health         {"status": "ok"}
    {BASE}/student ...        route groups, see portal/routes/__init__.py

Lifecycle:
    Startup (lifespan, before the socket is bound):
    1. Initialize logging

    After a successful bind (PortalServer.startup):
    2. Fire the database connect (not awaited, failures only logged)
    3. Log the listening address and base path

    A plain `uvicorn portal.main:app` serves the same routes but skips
    steps 2 and 3.

    Shutdown:
    1. Cancel the connect task if it is still pending
    2. Dispose database engine (close all connections)
"""

import asyncio
import contextlib
import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from portal import __version__
from portal.config import Settings, api_path, settings as default_settings
from portal.database import connect, dispose_engine
from portal.exceptions import (
    PortalError,
    ValidationError,
    NotFoundError,
    DatabaseError,
)
from portal.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from portal.middleware.logging import RequestLoggingMiddleware
from portal.routes import ROUTE_GROUPS, RouteGroups, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output goes to stdout, which Docker and Kubernetes collect.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Configure logging on startup; release resources on shutdown.

    The database connect is not started here: uvicorn runs the lifespan
    before it binds the socket, so the connect belongs to PortalServer,
    which only fires it once the bind succeeded.
    """
    cfg: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(cfg.log_level)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    task: Optional[asyncio.Task] = getattr(app.state, "db_connect_task", None)
    if task is not None:
        if not task.done():
            task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    await dispose_engine()
    logger.info("Shutdown complete.")


def on_server_bound(app: FastAPI, host: str, port: int) -> asyncio.Task:
    """
    Fire the database connect and announce the listening address.

    The connect runs as a background task that is never awaited; it is
    kept on `app.state` so it is not garbage collected mid-flight and so
    shutdown can cancel it.
    """
    cfg: Settings = app.state.settings
    app.state.db_connect_task = asyncio.create_task(connect())
    logger.info("Server listening on http://%s:%d (base: %s)", host, port, cfg.base_path)
    return app.state.db_connect_task


class PortalServer(uvicorn.Server):
    """
    uvicorn server that runs `on_server_bound` after a successful bind.

    `config.app` must be the FastAPI instance itself, not an import
    string. When the bind fails (port in use, bad address) uvicorn never
    marks the server as started and nothing is fired.
    """

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            on_server_bound(self.config.app, self.config.host, self.config.port)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to JSON error responses.

    Handler hierarchy:
        ValidationError      → 400 Bad Request
        NotFoundError        → 404 Not Found
        DatabaseError        → 500 Internal Server Error (generic message)
        PortalError (base)   → 500 Internal Server Error
        Exception (fallback) → 500 Internal Server Error (traceback logged)

    Every body carries the request ID so a client report can be matched
    to the server log.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Details go to the log only; the client gets the generic message."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(PortalError)
    async def handle_portal_error(request: Request, exc: PortalError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic body for the client, stack trace for the log."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    route_groups: Optional[RouteGroups] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings:      Configuration to build against; the process-wide
                       settings when omitted.
        route_groups:  (sub path, router) pairs to mount under the base
                       path; the portal's own groups when omitted.

    `settings` drives routes, CORS, the access log and the startup log
    line only. The database engine is process-wide and always built from
    the `DATABASE_URL` of the process settings (see portal/database.py).

    Returns:
        Fully configured FastAPI instance.
    """
    cfg = settings or default_settings
    groups = ROUTE_GROUPS if route_groups is None else route_groups
    base = cfg.base_path
    health_path = api_path(base, "/health")

    app = FastAPI(
        title="Campus Portal API",
        description=(
            "Backend for the campus portal: student, admin, career-service, "
            "faculty, batch, question upload and attendance route groups."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = cfg

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → route

    # Permissive CORS: any origin, method and header, no credentials
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    app.add_middleware(RequestLoggingMiddleware, skip_paths={health_path})

    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return "Backend is up. Try " + base + "/health"

    app.include_router(health.router, prefix=api_path(base))

    for sub_path, router in groups:
        app.include_router(router, prefix=api_path(base, sub_path))

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()


def run() -> None:
    """Serve `app` on the configured host and port."""
    config = uvicorn.Config(
        app,
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )
    PortalServer(config).run()
