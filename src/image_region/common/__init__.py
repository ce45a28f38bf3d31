"""
Common package - fundamental types without external dependencies.

This package contains basic types that are used throughout the system:
- Enums (RenderStatus, RenderingModelName)
- Constants (RenderingConstants, APIConstants, ...)
- Base models (RGBAColor, PixelRegion, ImageDescriptor, ...)

IMPORTANT: This package must NOT import from any other project packages
(schemas, core, services, api) to avoid circular dependencies.
"""

from image_region.common.base import (
    ChannelWindow,
    ImageDescriptor,
    PixelRect,
    PixelRegion,
    RegionSpec,
    RGBAColor,
    TileRegion,
)
from image_region.common.constants import (
    APIConstants,
    RenderingConstants,
    RequestConstants,
    SystemConstants,
)
from image_region.common.enums import RenderingModelName, RenderStatus

__all__ = [
    # Enums
    "RenderingModelName",
    "RenderStatus",
    # Constants
    "APIConstants",
    "RenderingConstants",
    "RequestConstants",
    "SystemConstants",
    # Base models
    "ChannelWindow",
    "ImageDescriptor",
    "PixelRect",
    "PixelRegion",
    "RegionSpec",
    "RGBAColor",
    "TileRegion",
]
