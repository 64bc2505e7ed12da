"""
FastAPI Application Entry Point.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wallboard.backend.api import health, share
from wallboard.backend.api.v1 import router as api_v1_router
from wallboard.backend.core import concurrency
from wallboard.backend.core.config import get_app_config
from wallboard.backend.core.database import dispose_engine, get_engine
from wallboard.backend.core.exception_handlers import register_exception_handlers
from wallboard.backend.core.logging import get_logger, log_with_source, setup_logging
from wallboard.backend.core.middleware import RequestContextMiddleware
from wallboard.backend.core.schema_version import verify_schema_version

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    if app_config.features.schema_check_enabled:
        await verify_schema_version(get_engine())

    log_with_source(
        logger,
        "internal",
        "info",
        "Application starting",
        app_name=app_config.application.name,
        env=app_config.application.environment,
    )
    yield
    logger.info("Application shutting down")
    await dispose_engine()
    concurrency.reset()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = get_app_config().application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)

    cors_origins = app_settings.cors.origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials="*" not in cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(share.router, tags=["share"])
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


# For uvicorn: `uvicorn wallboard.backend.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
