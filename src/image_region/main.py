"""
Image Region Service - Main FastAPI Application
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from image_region import __version__
from image_region.api.dependencies import get_app_settings
from image_region.api.exceptions import register_exception_handlers
from image_region.api.routers import region
from image_region.common.constants import APIConstants, SystemConstants
from image_region.config import Settings, get_settings

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format=SystemConstants.LOG_FORMAT,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    logger.info(f"Starting {APIConstants.SERVICE_NAME}...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")

    app.state.settings = settings
    app.state.debug = settings.system.debug

    # A client set before startup (tests, embedding) is kept
    if getattr(app.state, "rendering_client", None) is None:
        factory = settings.rendering.load_client_factory()
        if factory is None:
            logger.warning("No rendering client factory configured, renders will return 503")
            app.state.rendering_client = None
        else:
            app.state.rendering_client = factory()
            logger.info(f"Rendering client created by {settings.rendering.client_factory}")

    yield

    logger.info(f"Shutting down {APIConstants.SERVICE_NAME}...")
    client = getattr(app.state, "rendering_client", None)
    close = getattr(client, "close", None)
    if callable(close):
        try:
            close()
        except Exception as e:
            logger.error(f"Error closing rendering client: {e}")
    logger.info("Server shutdown complete")


# Create FastAPI app
app = FastAPI(
    title=APIConstants.SERVICE_NAME,
    description="Renders image regions through a remote rendering engine",
    version=__version__,
    lifespan=lifespan,
)

if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

app.include_router(region.router, tags=["Image Region"])


@app.get("/")
async def root(app_settings: Settings = Depends(get_app_settings)):
    return {
        "name": APIConstants.SERVICE_NAME,
        "status": "running",
        "version": __version__,
        "api_version": app_settings.api.api_version,
        "endpoints": {
            "render_image_region": "/webgateway/render_image_region/{image_id}/{z}/{t}",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "rendering_client": getattr(app.state, "rendering_client", None) is not None,
        },
    }


def run():
    """Run the service with uvicorn."""
    uvicorn.run(
        app,
        host=settings.api.host,
        port=settings.api.port,
        log_level=settings.system.log_level.lower(),
    )


if __name__ == "__main__":
    run()
