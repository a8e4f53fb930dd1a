"""
BTC Dashboard Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from btc_dashboard.core.config import settings
from btc_dashboard.api.v1 import router as api_v1_router
from btc_dashboard.services.cache import get_cache_store
from btc_dashboard.services.http import close_upstream_client

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Cache TTL: {settings.cache_ttl_seconds:.0f}s, next halving block: {settings.next_halving_block}")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await close_upstream_client()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    BTC Dashboard API

    ## Sources
    - **Price & History**: CoinGecko
    - **Fear & Greed Index**: alternative.me
    - **Network Stats**: blockchain.info
    - **News**: CoinGecko news feed

    ## Behaviour
    - Responses cached in memory for 5 minutes per data kind
    - Dashboard fails only if an essential source fails; news degrades to empty
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow both frontend ports
cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "cache": get_cache_store().stats(),
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "BTC Dashboard Backend API",
        "docs": "/docs",
        "health": "/health",
        "dashboard": "/api/v1/market/dashboard",
    }
