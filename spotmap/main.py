"""FastAPI application entry point for spotmap.

Run locally with:
    uvicorn spotmap.main:app --reload
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from spotmap.api.v1.router import router as api_v1_router
from spotmap.config import get_settings
from spotmap.database import engine
from spotmap.exceptions import SpotmapError
from spotmap.logging_config import setup_logging

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - startup and shutdown events."""
    # Startup
    logger.info("Starting spotmap API...")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Database: {settings.async_database_url.split('@')[-1]}")  # Hide credentials

    # Test database connection
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")

    yield

    # Shutdown
    logger.info("Shutting down spotmap API...")
    await engine.dispose()


# Create FastAPI app
app = FastAPI(
    title="spotmap API",
    description="Community-curated points of interest with reviews and moderation",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
allowed_origins = [
    settings.frontend_url,
    "http://localhost:3000",  # Local development
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins if not settings.is_development else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SpotmapError)
async def spotmap_error_handler(request: Request, exc: SpotmapError) -> JSONResponse:
    """Map classified service errors to their HTTP status; unclassified ones become 500."""
    status_code = exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


# Include routers
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "name": "spotmap API",
        "version": "0.1.0",
        "description": "Community-curated points of interest",
    }

