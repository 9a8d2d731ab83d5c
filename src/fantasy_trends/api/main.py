"""
FastAPI application for the Fantasy Trends API.

Serves three read endpoints over the nfl_fantasy_trends table:
- /api/nfl-players - distinct players with recent changes (paginated)
- /api/nfl-player-details - one player's weekly series and summary
- /api/nfl-stats - leaderboards and whole-table totals

Nothing is cached; every response is recomputed from freshly read rows.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

import msgspec
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from ..core.config import get_settings
from .dependencies import close_repo, get_repo
from .errors import APIError, api_error_handler, request_validation_handler
from .routers import players, stats

logger = logging.getLogger(__name__)


class MSGSpecResponse(Response):
    """Custom response class using msgspec for JSON serialization."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        """
        Serialize content using msgspec.

        Args:
            content: Content to serialize

        Returns:
            Serialized JSON bytes
        """
        if content is None:
            return b""
        return msgspec.json.encode(content)


def _resolve_repo(app: FastAPI):
    """Return the repository the routes will use, honoring dependency overrides."""
    provider = app.dependency_overrides.get(get_repo, get_repo)
    return provider()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.

    Startup:
    - Build the repository and open its connection pool

    Shutdown:
    - Close the repository
    """
    logger.info("Starting Fantasy Trends API...")

    try:
        repo = _resolve_repo(app)
        await repo.open()
    except Exception as e:
        logger.error(f"Failed to initialize Record Store: {e}")
        # Don't fail startup, let requests handle connection errors

    yield

    logger.info("Shutting down Fantasy Trends API...")
    try:
        await close_repo()
    except Exception as e:
        logger.warning(f"Error closing Record Store: {e}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Read-only analytics over weekly fantasy-football player trends",
        version=settings.app_version,
        default_response_class=MSGSpecResponse,
        docs_url=settings.api_docs_url,
        redoc_url=settings.api_redoc_url,
        lifespan=lifespan,
    )

    # CORS middleware - allows the dashboard to call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        allow_credentials=settings.cors_allow_credentials,
        expose_headers=settings.cors_expose_headers,
    )

    # GZip compression middleware - compresses responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def add_process_time(request: Request, call_next):
        """Add timing header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000  # Convert to ms
        response.headers["X-Process-Time"] = f"{process_time:.2f}ms"
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store"
        return response

    # Register custom API error handlers for consistent error responses
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with consistent format."""
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "An internal error occurred"},
        )

    # Health check endpoints
    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now(tz=timezone.utc).isoformat()}

    @app.get("/health/db", tags=["health"])
    async def health_check_db():
        """Record Store connectivity health check."""
        try:
            reachable = await _resolve_repo(app).ping()
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            reachable = False

        if not reachable:
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "database": "disconnected",
                    "error": "Database connection check failed",
                    "timestamp": datetime.now(tz=timezone.utc).isoformat(),
                },
            )
        return {
            "status": "healthy",
            "database": "connected",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "docs": settings.api_docs_url,
        }

    # Player list and player detail
    app.include_router(players.router, prefix="/api", tags=["players"])
    # Leaderboards and totals
    app.include_router(stats.router, prefix="/api", tags=["stats"])

    return app


# Create app instance
app = create_app()
