"""Claim Registry - Main Application Module."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from beartype import beartype
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.v1 import router as v1_router
from .core.config import get_settings
from .core.database import get_database
from .core.logging_utils import configure_logging, get_logger
from .schemas.common import APIInfo
from .store import create_store

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle - startup and shutdown."""
    settings = get_settings()
    logger.info(
        "Starting %s in %s mode (%s store)",
        settings.app_name,
        settings.api_env,
        settings.store_backend,
    )

    db = None
    if settings.store_backend == "postgres":
        db = get_database()
        await db.connect()

    app.state.store = create_store(settings, db)

    yield

    logger.info("Shutting down %s", settings.app_name)
    app.state.store = None
    if db is not None:
        await db.disconnect()


@beartype
def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, force=True)

    app = FastAPI(
        title=settings.app_name,
        description="Record service for insurance claims and their involved parties",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(v1_router)

    # Root endpoint
    @app.get("/")
    async def root() -> APIInfo:
        """Root endpoint returning API information."""
        return APIInfo(
            name=settings.app_name,
            version=__version__,
            status="operational",
            environment=settings.api_env,
            docs_url=app.docs_url,
        )

    return app


# Create the application instance
app = create_app()


@beartype
def main() -> None:
    """Run the main application entry point."""
    settings = get_settings()
    uvicorn.run(
        "claim_registry.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level="info" if not settings.is_production else "error",
    )


if __name__ == "__main__":
    main()
