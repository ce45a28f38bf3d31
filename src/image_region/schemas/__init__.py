"""
Schemas Package

Pydantic schemas for request validation, shared by the API and service layers.
"""

from image_region.schemas.region import (
    RegionQuery,
    RegionRequest,
    parse_channel_info,
    parse_region,
    parse_tile,
)

__all__ = [
    "RegionQuery",
    "RegionRequest",
    "parse_channel_info",
    "parse_region",
    "parse_tile",
]
