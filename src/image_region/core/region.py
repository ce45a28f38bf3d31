"""
Region resolution - turn a tile coordinate or pixel rectangle into pixel space.
"""

import logging
from typing import Optional, Tuple

from image_region.api.exceptions import InvalidRegionException
from image_region.common.base import PixelRect, PixelRegion, RegionSpec, TileRegion
from image_region.core.rendering import RenderingEngine

logger = logging.getLogger(__name__)


def resolve_region(
    region: Optional[RegionSpec], tile_size: Optional[Tuple[int, int]] = None
) -> PixelRegion:
    """
    Resolve a requested region to pixel coordinates.

    Args:
        region: Tile coordinate or explicit rectangle
        tile_size: (width, height) of one tile, required for tile regions

    Returns:
        PixelRegion in pixel space

    Raises:
        InvalidRegionException: If no region was supplied
    """
    if isinstance(region, TileRegion):
        if tile_size is None:
            raise ValueError("Tile size is required to resolve a tile region")
        width, height = tile_size
        return PixelRegion(
            x=region.column * width, y=region.row * height, width=width, height=height
        )
    if isinstance(region, PixelRect):
        return PixelRegion(x=region.x, y=region.y, width=region.width, height=region.height)

    logger.error("Tile or region argument required.")
    raise InvalidRegionException("Tile or region argument required.")


def get_region_def(engine: RenderingEngine, region: Optional[RegionSpec]) -> PixelRegion:
    """Resolve a region, asking the engine for its tile size only when needed."""
    logger.debug("Setting region to read")
    tile_size = engine.get_tile_size() if isinstance(region, TileRegion) else None
    return resolve_region(region, tile_size)
