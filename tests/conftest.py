"""
Pytest configuration and fixtures for Image Region Service tests
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest

from image_region.common.base import ImageDescriptor
from image_region.services.image_lookup import ImageLookup
from image_region.services.region_service import RegionService

RENDERED_BYTES = b"\xff\xd8\xff\xe0fake-jpeg"


@dataclass(frozen=True)
class FakeRenderingModel:
    id: int
    value: str


class RecordingRenderingEngine:
    """Rendering engine double that records every call made to it."""

    def __init__(
        self,
        tile_size: Tuple[int, int] = (256, 256),
        resolution_levels: int = 5,
        models: Optional[List[FakeRenderingModel]] = None,
        has_rendering_def: bool = True,
        fail_on: Optional[str] = None,
    ):
        self.tile_size = tile_size
        self.resolution_levels = resolution_levels
        self.models = models or [FakeRenderingModel(1, "greyscale"), FakeRenderingModel(2, "rgb")]
        self.has_rendering_def = has_rendering_def
        self.fail_on = fail_on
        self.calls: List[Tuple] = []
        self.close_count = 0

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail_on == name:
            raise RuntimeError(f"{name} failed")

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def calls_to(self, name: str) -> List[Tuple]:
        return [call[1:] for call in self.calls if call[0] == name]

    def lookup_pixels(self, pixels_id, ctx):
        self._record("lookup_pixels", pixels_id, ctx)

    def lookup_rendering_def(self, pixels_id, ctx):
        self._record("lookup_rendering_def", pixels_id, ctx)
        return self.has_rendering_def

    def reset_default_settings(self, save, ctx):
        self._record("reset_default_settings", save, ctx)
        self.has_rendering_def = True

    def load(self, ctx):
        self._record("load", ctx)

    def get_tile_size(self):
        self._record("get_tile_size")
        return list(self.tile_size)

    def get_resolution_levels(self):
        self._record("get_resolution_levels")
        return self.resolution_levels

    def get_available_models(self):
        self._record("get_available_models")
        return self.models

    def set_model(self, model):
        self._record("set_model", model)

    def set_active(self, channel, active, ctx):
        self._record("set_active", channel, active, ctx)

    def set_channel_window(self, channel, start, end, ctx):
        self._record("set_channel_window", channel, start, end, ctx)

    def set_rgba(self, channel, red, green, blue, alpha, ctx):
        self._record("set_rgba", channel, red, green, blue, alpha, ctx)

    def set_resolution_level(self, level):
        self._record("set_resolution_level", level)

    def set_compression_level(self, quality):
        self._record("set_compression_level", quality)

    def render_compressed(self, plane_def):
        self._record("render_compressed", plane_def)
        return RENDERED_BYTES

    def close(self):
        self.close_count += 1
        self.calls.append(("close",))


class FakeRenderingClient:
    """Rendering client double serving a fixed set of images."""

    def __init__(self, images: Optional[Dict[int, ImageDescriptor]] = None, **engine_options):
        self.images = images or {}
        self.engine_options = engine_options
        self.engines: List[RecordingRenderingEngine] = []
        self.queries: List[Tuple[List[int], Dict[str, str]]] = []
        self.fail_on_acquire = False

    def find_images(self, image_ids, ctx):
        self.queries.append((list(image_ids), dict(ctx)))
        return [self.images[i] for i in image_ids if i in self.images]

    def create_rendering_engine(self):
        if self.fail_on_acquire:
            raise ConnectionError("rendering engine unavailable")
        engine = RecordingRenderingEngine(**self.engine_options)
        self.engines.append(engine)
        return engine

    @property
    def engine(self) -> RecordingRenderingEngine:
        return self.engines[-1]

    @property
    def remote_call_count(self) -> int:
        return len(self.queries) + sum(len(engine.calls) for engine in self.engines)


@pytest.fixture
def image_descriptor():
    """Three channel image owned by group 7"""
    return ImageDescriptor(image_id=1, pixels_id=11, size_c=3, group_id=7)


@pytest.fixture
def rendering_client(image_descriptor):
    """Fake rendering client that knows one image"""
    return FakeRenderingClient(images={image_descriptor.image_id: image_descriptor})


@pytest.fixture
def region_service(rendering_client):
    """Create RegionService over the fake client"""
    return RegionService(client=rendering_client)


@pytest.fixture
def image_lookup(rendering_client):
    """Create ImageLookup over the fake client"""
    return ImageLookup(rendering_client)


@pytest.fixture
def mock_rendering_engine():
    """Create mock RenderingEngine for unit testing"""
    mock = MagicMock()
    mock.get_tile_size.return_value = [512, 256]
    mock.get_resolution_levels.return_value = 5
    mock.lookup_rendering_def.return_value = True
    mock.render_compressed.return_value = RENDERED_BYTES
    return mock


@pytest.fixture
def rendered_bytes():
    """Bytes every fake engine returns from render_compressed"""
    return RENDERED_BYTES


@pytest.fixture
def make_rendering_client(image_descriptor):
    """Factory for fake clients with custom engine behavior"""

    def _make(**engine_options):
        return FakeRenderingClient(
            images={image_descriptor.image_id: image_descriptor}, **engine_options
        )

    return _make
