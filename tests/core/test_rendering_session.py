"""
Tests for core.rendering module.
"""

import pytest

from image_region.core.rendering import rendering_session
from image_region.core.utils import timer


class TestRenderingSession:
    """Tests for the rendering_session context manager."""

    def test_closes_on_success(self, rendering_client, image_descriptor):
        """Test engine is closed after normal exit."""
        with rendering_session(rendering_client, image_descriptor) as engine:
            engine.load({})

        assert engine.close_count == 1

    def test_closes_on_error(self, rendering_client, image_descriptor):
        """Test engine is closed when the body raises."""
        with pytest.raises(RuntimeError):
            with rendering_session(rendering_client, image_descriptor) as engine:
                raise RuntimeError("boom")

        assert rendering_client.engine.close_count == 1

    def test_each_session_gets_its_own_engine(self, rendering_client):
        """Test engines are never reused across sessions."""
        with rendering_session(rendering_client) as first:
            pass
        with rendering_session(rendering_client) as second:
            pass

        assert first is not second
        assert len(rendering_client.engines) == 2


class TestTimer:
    """Tests for the timer context manager."""

    def test_records_elapsed_ms(self):
        """Test elapsed milliseconds are filled in on exit."""
        with timer("test") as t:
            pass

        assert t["ms"] >= 0
