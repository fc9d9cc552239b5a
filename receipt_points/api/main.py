"""Entry point for the FastAPI application.

This module constructs the FastAPI app, registers exception handlers,
includes all routers and sets up startup and shutdown events. When run
with uvicorn it loads configuration from ``receipt_points.core.config``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from receipt_points.core.config import settings
from receipt_points.core.observability import configure_logging, init_sentry
from receipt_points.api.endpoints.health import router as health_router
from receipt_points.api.routes.receipts import router as receipts_router
from receipt_points.api.error_handlers import (
    generic_exception_handler,
    points_not_found_handler,
    points_store_exception_handler,
    validation_exception_handler,
)
from receipt_points.services.points_store import PointsNotFoundError, PointsStoreError

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    # Startup
    logger.info("Starting up (%s, store=%s)...", settings.ENVIRONMENT, settings.POINTS_STORE_BACKEND.value)
    if init_sentry("api"):
        logger.info("Sentry SDK initialized (api)")
    yield
    # Shutdown
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
)

# Register custom exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(PointsNotFoundError, points_not_found_handler)
app.add_exception_handler(PointsStoreError, points_store_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include routers
app.include_router(receipts_router)
app.include_router(health_router)


def serve() -> None:
    """Run the API with uvicorn on ``settings.HOST:settings.PORT``."""
    logger.info("Server listening on %s:%d", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":  # pragma: no cover
    serve()
