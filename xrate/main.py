from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from xrate.core.config import settings
from xrate.core.logging import init_logging
from xrate.routers import api_router
from xrate.services.rate_fetcher import RateFetcher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    # Startup
    init_logging(settings.debug)

    # Missing access key is fatal here: no request could ever succeed
    app.state.rate_fetcher = RateFetcher(settings.rate_fetcher_config())
    logger.info(f"Rate fetcher initialized for {settings.exchange_api_base_url}")

    yield

    # Shutdown
    app.state.rate_fetcher.close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Historical currency exchange rates",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Include API routes
app.include_router(api_router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "api": settings.api_v1_prefix,
    }
