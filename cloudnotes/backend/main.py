"""
FastAPI Application Entry Point.

Run with uvicorn: `uvicorn cloudnotes.backend.main:app`
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cloudnotes.backend.api import health
from cloudnotes.backend.api.v1 import router as api_v1_router
from cloudnotes.backend.core.config import get_app_config
from cloudnotes.backend.core.database import Database
from cloudnotes.backend.core.exception_handlers import register_exception_handlers
from cloudnotes.backend.core.logging import get_logger, setup_logging
from cloudnotes.backend.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)

_app: FastAPI | None = None


def _build_lifespan(database: Database | None):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager. Owns the database handle."""
        app_config = get_app_config()
        setup_logging()

        app.state.database = database or Database.from_config()

        logger.info(
            "Application starting",
            extra={
                "app_name": app_config.application.name,
                "env": app_config.application.environment,
            },
        )
        yield
        logger.info("Application shutting down")
        await app.state.database.dispose()

    return lifespan


def create_app(database: Database | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Handle to use instead of one built from configuration
            at startup. Disposed at shutdown either way.
    """
    app_config = get_app_config()
    app_settings = app_config.application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=_build_lifespan(database),
    )
    if database is not None:
        # Available before the lifespan runs (e.g. ASGI test transports)
        app.state.database = database

    app.add_middleware(
        RequestContextMiddleware,
        log_requests=app_config.features.api_request_logging,
    )

    cors_origins = app_settings.cors.origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    Creates the app on first call and caches it, so importing this module
    never reads configuration.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
