"""
FastAPI application setup for the TourHub favorites service.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from contextlib import asynccontextmanager

from tourhub.config import get_settings
from tourhub.core.logging import configure_logging
from tourhub.core.error_handlers import setup_error_handlers
from tourhub.middleware import RequestContextMiddleware

# Get application settings
settings = get_settings()

configure_logging(
    level=settings.log_level.value,
    fmt=settings.log_format,
    log_file=settings.log_file,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.
    Creates tables on startup when configured and disposes the engine on shutdown.
    """
    from tourhub.core.db import engine, create_tables

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    try:
        if settings.database.create_tables_on_startup:
            await create_tables()
            logger.info("Database tables ensured")

        logger.info("Application startup complete")

        yield

    except Exception as e:
        logger.error(f"Application startup failed: {e}", exc_info=True)
        raise

    finally:
        logger.info("Shutting down application")
        await engine.dispose()
        logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    # Add CORS middleware with configuration
    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )

    # Request id + timing logs
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    from tourhub.api.health_endpoints import router as health_router
    from tourhub.api.auth_endpoints import router as auth_router
    from tourhub.api.graphql_endpoints import router as graphql_router
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(graphql_router)

    @app.get("/")
    async def root():
        """Root endpoint for basic liveness check."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "running"
        }

    return app


# Create application instance
app = create_app()
