"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.infrastructure.crop_catalog import get_crop_catalog
from app.middleware.error_handler import ErrorHandlerMiddleware
from app.api.v1.routers import crops, projects

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# Rate limiter
limiter = Limiter(key_func=get_remote_address)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Summary config: planting_strategy={settings.planting_strategy}, "
                f"lateral_emitter_tolerance={settings.lateral_emitter_tolerance_m}m")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")

    catalog = get_crop_catalog()
    logger.info(f"Crop catalog loaded: {len(catalog.list())} crops in "
                f"{len(catalog.categories())} categories")

    yield

    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Statistics engine for irrigation design projects

    Turns map-drawn zones, pipe networks and emitters into per-zone and
    project-wide metrics.

    ## Features

    - **Zone Summaries**: area (m² and rai), planting points, yield, income
      and water demand per irrigation
    - **Pipe Network Statistics**: count, total and longest length per
      main/submain/lateral tier, per zone and for the whole project
    - **Emitter Tallies**: sprinklers, mini sprinklers, micro sprays and drip
      tape per zone
    - **Crop Catalog**: built-in crop spacing, water, yield and price data

    ## Planting Point Estimation

    1. When the project has pipes, each lateral in a zone holds
       floor(length / plant spacing) + 1 planting points
    2. Otherwise, points = floor(area / (row spacing x plant spacing))
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(projects.router, prefix="/api/v1")
app.include_router(crops.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "crops": len(get_crop_catalog().list()),
    }
