"""
Main FastAPI application for the Hydrology Events API.

This module contains the main FastAPI application instance and root endpoint.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.core.errors import APIError, api_error_handler
from app.database import engine
from app.routers.stations import router as stations_router
from app.routers.basins import router as basins_router
from app.utils.logging_config import setup_logging, get_logger

# Import all models so the tables are registered on Base.metadata
import app.models  # noqa: F401 - triggers import of all model classes

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Initialize rate limiter
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Handles startup and shutdown events. The database is opened read-only
    and is expected to be populated already.
    """
    # Startup
    logger.info("=" * 60)
    logger.info(f"{settings.PROJECT_NAME} - Application starting up")
    logger.info(f"Environment: {'Development' if settings.DEBUG else 'Production'}")
    logger.info(f"API Prefix: {settings.API_PREFIX}")
    logger.info(f"Database: {settings.SQLALCHEMY_DATABASE_URI.split('://')[0]} ({settings.HYDROLOGY_DB_PATH})")
    logger.info("=" * 60)

    yield

    # Shutdown
    await engine.dispose()
    logger.info("=" * 60)
    logger.info(f"{settings.PROJECT_NAME} - Application shutting down")
    logger.info("=" * 60)


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Read-only query API over flash-flood event records of Japanese hydrological stations",
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(APIError, api_error_handler)

# Set up CORS
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )


@app.get("/")
@limiter.limit(f"{settings.RATE_LIMIT_REQUESTS}/{settings.RATE_LIMIT_WINDOW}seconds")
async def root(request: Request):
    """
    Root endpoint returning API information.
    """
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": settings.VERSION,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
@limiter.limit("60/minute")  # More generous limit for health checks
async def health_check(request: Request):
    """
    Health check endpoint.

    Rate limit: 60 requests per minute
    """
    return {"status": "healthy"}


# Include routers
app.include_router(stations_router, prefix=settings.API_PREFIX)
app.include_router(basins_router, prefix=settings.API_PREFIX)
