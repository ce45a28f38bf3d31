"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient

from image_region.config import Settings


@pytest.fixture
def api_settings():
    """Default settings for the app under test"""
    return Settings()


@pytest.fixture(scope="function")
def client(rendering_client, api_settings):
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from image_region.main import app

    app.state.settings = api_settings
    app.state.debug = False
    app.state.rendering_client = rendering_client

    # No context manager: lifespan would replace the client from config
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client

    app.state.rendering_client = None
