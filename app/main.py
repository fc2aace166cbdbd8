"""FastAPI application entry point.

This module creates and configures the FastAPI application instance.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api import register_exception_handlers, router
from app.core.config import get_config
from app.core.logging import get_logger, setup_logging

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    config = get_config()
    logger.info("Starting upload relay", env=config.app_env, port=config.port)

    yield

    logger.info("Shutting down upload relay")


def create_app() -> FastAPI:
    """Create the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    config = get_config()
    application = FastAPI(
        title=config.app_name,
        description="Relay resumable video uploads to the YouTube Data API",
        version="0.1.0",
        docs_url="/docs" if config.is_development else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    application.include_router(router)
    register_exception_handlers(application)
    return application


app = create_app()
