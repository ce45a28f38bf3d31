"""
Region Service - drives the rendering engine for one image region request.

The protocol against the engine is a single ordered pass: bind the engine to
the image's pixel set, make sure rendering settings exist, load them, apply
the request's model, channels, resolution and compression, then render. The
engine is closed on every exit path.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from image_region.api.exceptions import InvalidRegionException
from image_region.common.base import ImageDescriptor
from image_region.common.constants import RenderingConstants
from image_region.common.enums import RenderStatus
from image_region.core.channels import apply_channel_plan, build_channel_plan
from image_region.core.region import get_region_def
from image_region.core.rendering import (
    CallContext,
    PlaneDef,
    RenderingClient,
    RenderingEngine,
    rendering_session,
)
from image_region.core.utils import timer
from image_region.schemas.region import RegionRequest
from image_region.services.image_lookup import ImageLookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOutcome:
    """Result of a render request: bytes, not found, or failed with a reason."""

    status: RenderStatus
    data: Optional[bytes] = None
    reason: Optional[str] = None

    @classmethod
    def found(cls, data: bytes) -> "RenderOutcome":
        return cls(status=RenderStatus.FOUND, data=data)

    @classmethod
    def not_found(cls) -> "RenderOutcome":
        return cls(status=RenderStatus.NOT_FOUND)

    @classmethod
    def failed(cls, reason: str) -> "RenderOutcome":
        return cls(status=RenderStatus.FAILED, reason=reason)


class RegionService:
    """
    Service that renders image regions through the remote rendering engine.

    One instance serves one request; the engine it acquires is never shared.
    """

    def __init__(
        self,
        client: RenderingClient,
        image_lookup: Optional[ImageLookup] = None,
        default_compression_quality: float = RenderingConstants.DEFAULT_COMPRESSION_QUALITY,
    ):
        """
        Initialize region service.

        Args:
            client: Rendering client for this request
            image_lookup: Image lookup, defaults to one over the same client
            default_compression_quality: Quality used when the request has none
        """
        self.client = client
        self.image_lookup = image_lookup or ImageLookup(client)
        self.default_compression_quality = default_compression_quality

    def render(self, request: RegionRequest) -> RenderOutcome:
        """
        Render the requested region.

        Args:
            request: Validated region request

        Returns:
            RenderOutcome with the compressed bytes, NOT_FOUND or FAILED

        Raises:
            InvalidRegionException: If the request names neither tile nor region
        """
        if request.region is None:
            logger.error(f"Tile or region argument required for image {request.image_id}")
            raise InvalidRegionException("Tile or region argument required.")

        try:
            image = self.image_lookup.get_image(request.image_id)
            if image is None:
                logger.debug(f"Cannot find Image:{request.image_id}")
                return RenderOutcome.not_found()
            return RenderOutcome.found(self.get_region(image, request))
        except Exception as e:
            logger.error(
                f"Exception while retrieving image region for Image:{request.image_id}: {e}",
                exc_info=True,
            )
            return RenderOutcome.failed(str(e) or e.__class__.__name__)

    def render_image_region(self, request: RegionRequest) -> Optional[bytes]:
        """
        Render the requested region, collapsing not found and failure to None.

        Args:
            request: Validated region request

        Returns:
            Compressed image bytes or None
        """
        return self.render(request).data

    def get_region(self, image: ImageDescriptor, request: RegionRequest) -> bytes:
        """
        Run the rendering protocol for one image.

        Args:
            image: Descriptor of the image to render
            request: Validated region request

        Returns:
            Compressed image bytes from the engine
        """
        logger.debug(f"Getting image region for Image:{image.image_id}")
        ctx: CallContext = {RenderingConstants.GROUP_CONTEXT_KEY: str(image.group_id)}

        with rendering_session(self.client, image) as engine:
            engine.lookup_pixels(image.pixels_id, ctx)
            if not engine.lookup_rendering_def(image.pixels_id, ctx):
                engine.reset_default_settings(True, ctx)
                engine.lookup_rendering_def(image.pixels_id, ctx)
            engine.load(ctx)

            region = get_region_def(engine, request.region)
            plane_def = PlaneDef(z=request.z, t=request.t, region=region)
            self.set_rendering_model(engine, request.model)
            plan = build_channel_plan(
                request.channels, image.size_c, request.windows, request.colors
            )
            apply_channel_plan(engine, plan, ctx)
            self.set_resolution_level(engine, request.resolution)
            self.set_compression_level(engine, request.compression_quality)

            with timer("renderCompressed"):
                return engine.render_compressed(plane_def)

    def set_rendering_model(self, engine: RenderingEngine, model: Optional[str]) -> None:
        """Select the named model if the engine offers it, otherwise keep the current one."""
        logger.debug(f"Setting rendering model: {model}")
        if model is None:
            return
        for rendering_model in engine.get_available_models():
            if rendering_model.value == model:
                engine.set_model(rendering_model)
                return
        logger.warning(f"Rendering model {model!r} not available, keeping current model")

    def set_resolution_level(self, engine: RenderingEngine, resolution: Optional[int]) -> None:
        """Apply the requested resolution; 0 on the request is full resolution."""
        logger.debug(f"Setting resolution level: {resolution}")
        if resolution is None:
            return
        number_of_levels = engine.get_resolution_levels()
        level = number_of_levels - resolution - 1
        logger.debug(f"Setting resolution level to: {level}")
        engine.set_resolution_level(level)

    def set_compression_level(self, engine: RenderingEngine, quality: Optional[float]) -> None:
        """Apply the requested compression quality or the default."""
        logger.debug(f"Setting compression level: {quality}")
        if quality is not None:
            engine.set_compression_level(quality)
        else:
            engine.set_compression_level(self.default_compression_quality)
