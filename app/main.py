"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import settings
from app.core.logging import configure_logging
from app.errors import AppError, app_error_handler
from app.routers import (
    candidates,
    health,
    interview_outcomes,
    interview_processes,
    interview_schedules,
    onboard_requests,
    positions,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup."""
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting %s", settings.APP_NAME)

    yield

    logger.info("Shutting down %s", settings.APP_NAME)


# Create the FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Interview pipeline: stages, scheduling, outcomes and onboarding",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(AppError, app_error_handler)

# Include routers (API endpoints)
app.include_router(health.router)
app.include_router(interview_processes.router)
app.include_router(positions.router)
app.include_router(candidates.router)
app.include_router(interview_schedules.router)
app.include_router(interview_outcomes.router)
app.include_router(onboard_requests.router)
