"""
Service layer for the Image Region Service.
"""

from .image_lookup import ImageLookup
from .region_service import RegionService, RenderOutcome

__all__ = ["ImageLookup", "RegionService", "RenderOutcome"]
