"""
FastAPI application entry point.

Run with `uvicorn api.main:create_app --factory`.
"""
import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from api.errors import UnhandledErrorMiddleware, register_exception_handlers
from api.routers import bookmarks, root
from core.auth import BearerTokenMiddleware
from core.config import Settings, get_settings
from core.logging_config import configure_logging
from db.session import create_engine, create_session_factory
from services.bookmark_store import BookmarkStore, SqlBookmarkStore

logger = logging.getLogger("api.access")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # HSTS: enforce HTTPS for 1 year, including subdomains
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with its status and duration."""

    def __init__(self, app: ASGIApp, verbose: bool = True) -> None:
        super().__init__(app)
        self.verbose = verbose

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Time the request and log the outcome."""
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        if self.verbose:
            logger.info(
                "%s %s %s %.1f ms - %s",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
                response.headers.get("content-length", "-"),
            )
        else:
            logger.info(
                "%s %s %s %.1f ms",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
        return response


def create_app(
    settings: Settings | None = None,
    store: BookmarkStore | None = None,
) -> FastAPI:
    """
    Build the application.

    Settings and the bookmark store are fixed at construction and exposed to
    request handlers through `app.state`. When no store is given, one is built
    on a new engine for `settings.database_url`, and that engine is disposed on
    shutdown.
    """
    app_settings = settings or get_settings()
    configure_logging(app_settings)

    engine = None
    if store is None:
        engine = create_engine(app_settings)
        store = SqlBookmarkStore(create_session_factory(engine))

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
        """Manage application lifespan - dispose the engine we own on shutdown."""
        yield
        if engine is not None:
            await engine.dispose()

    app = FastAPI(
        title="Bookmarks API",
        description="A token-protected bookmark store with rating and markup sanitization.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.bookmark_store = store

    register_exception_handlers(app)

    # Added innermost first; the token check runs before routing and body parsing
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(BearerTokenMiddleware, api_token=app_settings.api_token)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware, verbose=not app_settings.is_production)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(root.router)
    app.include_router(bookmarks.router)
    return app
