"""
Rendering engine interfaces.

The rendering engine lives in a remote service. This module describes the
subset of its API the region service drives, plus the scoped guard that
guarantees every engine handle is closed.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Protocol, Sequence, Tuple

from image_region.common.base import ImageDescriptor, PixelRegion

logger = logging.getLogger(__name__)

CallContext = Dict[str, str]


class RenderingModel(Protocol):
    """A named strategy for combining channels (greyscale, rgb, ...)."""

    @property
    def value(self) -> str: ...


@dataclass(frozen=True)
class PlaneDef:
    """The (z, t, region) triple identifying what to render."""

    z: int
    t: int
    region: PixelRegion


class RenderingEngine(Protocol):
    """Stateful handle to the remote rendering engine, bound to one pixel set."""

    def lookup_pixels(self, pixels_id: int, ctx: CallContext) -> None: ...

    def lookup_rendering_def(self, pixels_id: int, ctx: CallContext) -> bool: ...

    def reset_default_settings(self, save: bool, ctx: CallContext) -> None: ...

    def load(self, ctx: CallContext) -> None: ...

    def get_tile_size(self) -> Tuple[int, int]: ...

    def get_resolution_levels(self) -> int: ...

    def get_available_models(self) -> Sequence[RenderingModel]: ...

    def set_model(self, model: RenderingModel) -> None: ...

    def set_active(self, channel: int, active: bool, ctx: CallContext) -> None: ...

    def set_channel_window(
        self, channel: int, start: float, end: float, ctx: CallContext
    ) -> None: ...

    def set_rgba(
        self, channel: int, red: int, green: int, blue: int, alpha: int, ctx: CallContext
    ) -> None: ...

    def set_resolution_level(self, level: int) -> None: ...

    def set_compression_level(self, quality: float) -> None: ...

    def render_compressed(self, plane_def: PlaneDef) -> bytes: ...

    def close(self) -> None: ...


class RenderingClient(Protocol):
    """Authenticated connection to the rendering service."""

    def find_images(self, image_ids: List[int], ctx: CallContext) -> List[ImageDescriptor]: ...

    def create_rendering_engine(self) -> RenderingEngine: ...


@contextmanager
def rendering_session(
    client: RenderingClient, image: Optional[ImageDescriptor] = None
) -> Iterator[RenderingEngine]:
    """
    Acquire a rendering engine and close it on every exit path.

    Usage:
        with rendering_session(client, image) as engine:
            engine.lookup_pixels(...)

    Args:
        client: Rendering client to create the engine from
        image: Image the session is for, used only for logging

    Yields:
        RenderingEngine exclusively owned by the caller
    """
    engine = client.create_rendering_engine()
    label = f"Image:{image.image_id}" if image is not None else "rendering engine"
    logger.debug(f"Acquired rendering engine for {label}")
    try:
        yield engine
    finally:
        engine.close()
        logger.debug(f"Closed rendering engine for {label}")
