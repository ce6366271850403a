"""
TeePublic Connector API — FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from core.config import get_settings

settings = get_settings()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("TeePublic Connector API starting up", version=settings.app_version)
    yield
    logger.info("TeePublic Connector API shutting down")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Orders, designs and payouts from the TeePublic seller portal",
    lifespan=lifespan,
)

# Import and register routers
from api.v1.routers import teepublic

app.include_router(teepublic.router)


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers."""
    return {"status": "healthy", "version": settings.app_version}
