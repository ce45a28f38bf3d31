"""
Shared FastAPI dependencies for the Image Region Service.
"""

import logging

from fastapi import Depends, Request

from image_region.api.exceptions import ServiceUnavailableException
from image_region.config import Settings, get_settings
from image_region.core.rendering import RenderingClient
from image_region.services.image_lookup import ImageLookup
from image_region.services.region_service import RegionService

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """
    Get application settings from app state, falling back to the cached settings.

    Args:
        request: FastAPI request object

    Returns:
        Settings instance
    """
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        logger.warning("Settings not found in app state, using defaults")
        return get_settings()
    return settings


def get_rendering_client(request: Request) -> RenderingClient:
    """
    Get the rendering client from app state.

    Raises:
        ServiceUnavailableException: If no client has been configured
    """
    client = getattr(request.app.state, "rendering_client", None)
    if client is None:
        logger.error("Rendering client not initialized in app state")
        raise ServiceUnavailableException("rendering client")
    return client


def get_region_service(
    client: RenderingClient = Depends(get_rendering_client),
    settings: Settings = Depends(get_app_settings),
) -> RegionService:
    """
    Get a region service for the current request.

    Args:
        client: Rendering client dependency
        settings: Settings dependency

    Returns:
        RegionService instance owned by this request
    """
    return RegionService(
        client=client,
        image_lookup=ImageLookup(client, query_group=settings.rendering.query_group),
        default_compression_quality=settings.rendering.default_compression_quality,
    )
