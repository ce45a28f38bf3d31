"""
Base data models - fundamental types without dependencies.

This module contains basic models used throughout the system:
- RGBAColor: 4-byte color handed to the rendering engine
- ChannelWindow: contrast window for one channel
- TileRegion / PixelRect: the two shapes a requested region can take
- PixelRegion: a region resolved to pixel space
- ImageDescriptor: what the lookup layer knows about an image

IMPORTANT: This module must NOT import from schemas, core, services, or api
to avoid circular dependencies.
"""

from __future__ import annotations

from typing import Dict, Literal, NamedTuple, Union

from pydantic import BaseModel, ConfigDict, Field


class RGBAColor(NamedTuple):
    """Color as four bytes, each 0-255."""

    red: int
    green: int
    blue: int
    alpha: int


class ChannelWindow(NamedTuple):
    """Input value range mapped to the full output intensity range."""

    start: float
    end: float


class TileRegion(BaseModel):
    """Region addressed by tile column/row; pixel size comes from the engine."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["tile"] = "tile"
    column: int = Field(..., ge=0, description="Tile column index")
    row: int = Field(..., ge=0, description="Tile row index")


class PixelRect(BaseModel):
    """Region given explicitly in pixel space."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rect"] = "rect"
    x: int = Field(..., ge=0, description="X coordinate")
    y: int = Field(..., ge=0, description="Y coordinate")
    width: int = Field(..., gt=0, description="Width")
    height: int = Field(..., gt=0, description="Height")


RegionSpec = Union[TileRegion, PixelRect]


class PixelRegion(BaseModel):
    """Resolved region handed to the rendering engine."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(..., ge=0, description="X coordinate")
    y: int = Field(..., ge=0, description="Y coordinate")
    width: int = Field(..., gt=0, description="Width")
    height: int = Field(..., gt=0, description="Height")

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for logging and engine adapters."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


class ImageDescriptor(BaseModel):
    """Image identity plus the primary pixel set details needed to render it."""

    model_config = ConfigDict(frozen=True)

    image_id: int
    pixels_id: int
    size_c: int = Field(..., ge=0, description="Number of channels")
    group_id: int = Field(..., description="Owning group identifier")
