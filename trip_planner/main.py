"""
FastAPI application setup for the trip planner API.
"""

from fastapi import FastAPI
import logging
from contextlib import asynccontextmanager
from typing import Optional

from trip_planner.config.loader import load_config_for_environment
from trip_planner.config.settings import Settings
from trip_planner.core.db import create_engine, create_sessionmaker, create_schema
from trip_planner.core.error_handlers import setup_error_handlers
from trip_planner.core.logging import configure_logging
from trip_planner.middleware import (
    AuthenticationMiddleware,
    OriginPolicyMiddleware,
    RequestContextMiddleware,
)
from trip_planner.middleware.auth import PUBLIC_PATHS, DOCS_PATHS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.
    Opens the database engine on startup and disposes it on shutdown.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    engine = create_engine(settings.database)
    app.state.engine = engine
    app.state.sessionmaker = create_sessionmaker(engine)

    try:
        if settings.database.auto_create_schema:
            await create_schema(engine)

        logger.info("Application startup complete")

        yield

    except Exception as e:
        logger.error(f"Application startup failed: {e}", exc_info=True)
        raise

    finally:
        # Shutdown
        logger.info("Shutting down application")
        await engine.dispose()
        logger.info("Application shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings to run with; loaded for $ENVIRONMENT when omitted

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or load_config_for_environment()
    configure_logging(settings.log_level.value, settings.log_format, settings.log_file)

    docs_enabled = settings.debug
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        redirect_slashes=False,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings

    public_paths = set(PUBLIC_PATHS)
    if docs_enabled:
        public_paths |= DOCS_PATHS

    # Last added runs first: request context, then origin policy, then auth
    app.add_middleware(AuthenticationMiddleware, security=settings.security, public_paths=public_paths)
    app.add_middleware(OriginPolicyMiddleware, security=settings.security)
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    # Include API routers
    from trip_planner.api import (
        auth_router,
        health_router,
        trips_router,
        resource_router,
        meta_router,
        flight_lookup_router,
    )
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(trips_router)
    app.include_router(resource_router)
    app.include_router(meta_router)
    app.include_router(flight_lookup_router)

    return app


# Create application instance
app = create_app()
