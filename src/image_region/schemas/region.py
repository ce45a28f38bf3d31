"""
Image region API models.

This module contains models for region rendering:
- RegionRequest: the validated, immutable description of one render
- RegionQuery: raw query-string values and their conversion to a RegionRequest

Query string format:
    tile=res,x,y[,w,h]        resolution index, tile column and row
    region=x,y,w,h            explicit pixel rectangle
    c=1|0:255$FF0000,-2,...   signed channel selector, optional window and color
    m=greyscale|rgb|g|c       rendering model
    q=0.8                     compression quality
"""

import logging
from dataclasses import dataclass
from typing import Annotated, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from image_region.api.exceptions import InvalidRequestParameterException
from image_region.common.base import PixelRect, TileRegion
from image_region.common.constants import RenderingConstants, RequestConstants
from image_region.common.enums import RenderingModelName

logger = logging.getLogger(__name__)

# Short model names accepted by the web clients
MODEL_ALIASES = {
    "g": RenderingModelName.GREYSCALE.value,
    "c": RenderingModelName.RGB.value,
}

RegionField = Annotated[Union[TileRegion, PixelRect], Field(discriminator="kind")]


class RegionRequest(BaseModel):
    """Everything needed to render one region of one image plane."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    image_id: int = Field(..., description="Image identifier")
    z: int = Field(0, ge=0, description="Z section index")
    t: int = Field(0, ge=0, description="Timepoint index")
    region: Optional[RegionField] = Field(None, description="Tile coordinate or pixel rectangle")
    channels: List[int] = Field(
        default_factory=list, description="Signed 1-based channel selectors"
    )
    windows: Optional[List[Optional[Tuple[float, float]]]] = Field(
        None, description="Contrast window per mentioned channel"
    )
    colors: Optional[List[Optional[str]]] = Field(
        None, description="Hex color per mentioned channel"
    )
    resolution: Optional[int] = Field(None, ge=0, description="Resolution index, 0 = full")
    compression_quality: Optional[float] = Field(
        None,
        ge=RenderingConstants.MIN_COMPRESSION_QUALITY,
        le=RenderingConstants.MAX_COMPRESSION_QUALITY,
        description="Compression quality",
    )
    model: Optional[str] = Field(None, description="Rendering model name")

    @field_validator("channels")
    @classmethod
    def validate_channels(cls, v):
        """Selectors are 1-based; zero names no channel."""
        if 0 in v:
            raise ValueError("Channel selectors are 1-based and cannot be 0")
        return v


def _parse_ints(param: str, value: str) -> List[int]:
    try:
        return [int(part) for part in value.split(RequestConstants.LIST_SEPARATOR)]
    except ValueError as e:
        raise InvalidRequestParameterException(param, value, str(e))


def parse_tile(value: str) -> Tuple[int, TileRegion]:
    """
    Parse ``res,x,y[,w,h]`` into a resolution index and tile coordinate.

    Returns:
        Tuple of (resolution, TileRegion)
    """
    parts = _parse_ints("tile", value)
    if len(parts) not in RequestConstants.TILE_FIELDS:
        raise InvalidRequestParameterException("tile", value, "expected res,x,y[,w,h]")
    if min(parts[:3]) < 0:
        raise InvalidRequestParameterException("tile", value, "values must not be negative")
    return parts[0], TileRegion(column=parts[1], row=parts[2])


def parse_region(value: str) -> PixelRect:
    """Parse ``x,y,w,h`` into an explicit pixel rectangle."""
    parts = _parse_ints("region", value)
    if len(parts) != RequestConstants.REGION_FIELDS:
        raise InvalidRequestParameterException("region", value, "expected x,y,w,h")
    x, y, width, height = parts
    if x < 0 or y < 0 or width <= 0 or height <= 0:
        raise InvalidRequestParameterException(
            "region", value, "x and y must be >= 0, width and height > 0"
        )
    return PixelRect(x=x, y=y, width=width, height=height)


def _parse_window(entry: str, window: str) -> Optional[Tuple[float, float]]:
    bounds = window.split(RequestConstants.WINDOW_RANGE_SEPARATOR)
    if len(bounds) < 2:
        return None
    try:
        return float(bounds[0]), float(bounds[1])
    except ValueError as e:
        raise InvalidRequestParameterException("c", entry, str(e))


def parse_channel_info(
    value: str,
) -> Tuple[List[int], List[Optional[Tuple[float, float]]], List[Optional[str]]]:
    """
    Parse the ``c`` parameter.

    Each comma separated entry looks like ``1|12:1386$0000FF``. The window and
    color are optional; a missing one is recorded as None so the windows and
    colors lists stay aligned with the selectors.

    Returns:
        Tuple of (channels, windows, colors)
    """
    channels: List[int] = []
    windows: List[Optional[Tuple[float, float]]] = []
    colors: List[Optional[str]] = []

    for entry in value.split(RequestConstants.LIST_SEPARATOR):
        active, _, rest = entry.partition(RequestConstants.CHANNEL_WINDOW_SEPARATOR)
        color = None
        window = None
        if RequestConstants.COLOR_SEPARATOR in active:
            active, color = active.split(RequestConstants.COLOR_SEPARATOR, 1)
        if rest:
            if RequestConstants.COLOR_SEPARATOR in rest:
                rest, color = rest.split(RequestConstants.COLOR_SEPARATOR, 1)
            window = _parse_window(entry, rest)

        try:
            selector = int(active)
        except ValueError as e:
            raise InvalidRequestParameterException("c", entry, str(e))
        if selector == 0:
            raise InvalidRequestParameterException("c", entry, "channels are 1-based")

        channels.append(selector)
        windows.append(window)
        colors.append(color or None)

    return channels, windows, colors


@dataclass(frozen=True)
class RegionQuery:
    """Raw values of a render_image_region call."""

    image_id: int
    z: int
    t: int
    tile: Optional[str] = None
    region: Optional[str] = None
    c: Optional[str] = None
    m: Optional[str] = None
    q: Optional[str] = None

    def to_request(self) -> RegionRequest:
        """
        Convert the raw query to a RegionRequest.

        When both ``tile`` and ``region`` are given the tile wins.

        Raises:
            InvalidRequestParameterException: If any parameter is malformed
        """
        resolution = None
        region: Optional[Union[TileRegion, PixelRect]] = None
        if self.tile:
            resolution, region = parse_tile(self.tile)
            if self.region:
                logger.warning(
                    f"Both tile and region given for image {self.image_id}, using tile"
                )
        elif self.region:
            region = parse_region(self.region)

        channels: List[int] = []
        windows = None
        colors = None
        if self.c:
            channels, windows, colors = parse_channel_info(self.c)

        quality = None
        if self.q is not None:
            try:
                quality = float(self.q)
            except ValueError as e:
                raise InvalidRequestParameterException("q", self.q, str(e))
            if not (
                RenderingConstants.MIN_COMPRESSION_QUALITY
                <= quality
                <= RenderingConstants.MAX_COMPRESSION_QUALITY
            ):
                raise InvalidRequestParameterException("q", self.q, "must be between 0 and 1")

        model = MODEL_ALIASES.get(self.m, self.m) if self.m else None

        return RegionRequest(
            image_id=self.image_id,
            z=self.z,
            t=self.t,
            region=region,
            channels=channels,
            windows=windows,
            colors=colors,
            resolution=resolution,
            compression_quality=quality,
            model=model,
        )
