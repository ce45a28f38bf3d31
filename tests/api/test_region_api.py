"""
API Integration Tests for Image Region Router Endpoints
"""

import pytest

from image_region.config import Settings

REGION_URL = "/webgateway/render_image_region"


class TestRegionRouterAPI:
    """Integration tests for render_image_region"""

    def test_render_region(self, client, rendered_bytes):
        """Test rendering an explicit rectangle"""
        response = client.get(f"{REGION_URL}/1/0/0", params={"region": "0,0,64,64"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/jpeg"
        assert response.content == rendered_bytes

    def test_render_tile(self, client, rendering_client):
        """Test tile request passes resolution and channels to the engine"""
        response = client.get(
            f"{REGION_URL}/1/2/3",
            params={"tile": "1,0,1", "c": "1|0:255$FF0000,-2,3", "m": "g", "q": "0.5"},
        )

        assert response.status_code == 200
        engine = rendering_client.engine
        (plane_def,) = engine.calls_to("render_compressed")[0]
        assert (plane_def.z, plane_def.t) == (2, 3)
        assert plane_def.region.y == 256
        assert engine.calls_to("set_resolution_level") == [(3,)]
        assert engine.calls_to("set_compression_level") == [(0.5,)]
        assert engine.calls_to("set_model")[0][0].value == "greyscale"
        assert engine.close_count == 1

    def test_webclient_route(self, client, rendered_bytes):
        """Test the webclient path serves the same endpoint"""
        response = client.get(
            "/webclient/render_image_region/1/0/0", params={"region": "0,0,8,8"}
        )

        assert response.status_code == 200
        assert response.content == rendered_bytes

    def test_image_not_found(self, client):
        """Test unknown image returns 404"""
        response = client.get(f"{REGION_URL}/404/0/0", params={"region": "0,0,8,8"})

        assert response.status_code == 404
        data = response.json()
        assert data["type"] == "ImageNotFoundException"
        assert data["details"]["image_id"] == 404

    def test_rendering_failure(self, client, rendering_client):
        """Test engine failure returns the failure status and closes the engine"""
        rendering_client.engine_options["fail_on"] = "load"

        response = client.get(f"{REGION_URL}/1/0/0", params={"region": "0,0,8,8"})

        assert response.status_code == 404
        assert response.json()["type"] == "RenderingException"
        assert rendering_client.engine.close_count == 1

    def test_missing_region(self, client, rendering_client):
        """Test request without tile or region is rejected before any remote call"""
        response = client.get(f"{REGION_URL}/1/0/0")

        assert response.status_code == 400
        assert response.json()["type"] == "InvalidRegionException"
        assert rendering_client.remote_call_count == 0

    @pytest.mark.parametrize(
        "params",
        [
            {"region": "0,0,10"},
            {"tile": "a,b,c"},
            {"tile": "0,1,1,512"},
            {"region": "0,0,8,8", "c": "x"},
            {"region": "0,0,8,8", "q": "2"},
        ],
    )
    def test_invalid_parameters(self, client, params):
        """Test malformed query parameters return 400"""
        response = client.get(f"{REGION_URL}/1/0/0", params=params)

        assert response.status_code == 400
        assert response.json()["type"] == "InvalidRequestParameterException"

    def test_negative_plane_index(self, client):
        """Test negative z is rejected"""
        response = client.get(f"{REGION_URL}/1/-1/0", params={"region": "0,0,8,8"})

        assert response.status_code == 400

    def test_no_rendering_client(self, client):
        """Test missing rendering client returns 503"""
        from image_region.main import app

        app.state.rendering_client = None

        response = client.get(f"{REGION_URL}/1/0/0", params={"region": "0,0,8,8"})

        assert response.status_code == 503
        assert response.json()["type"] == "ServiceUnavailableException"


class TestConfiguredStatusCodes:
    """Status codes for not found and failure come from settings"""

    @pytest.fixture
    def api_settings(self):
        return Settings(api={"not_found_status_code": 410, "failure_status_code": 502})

    def test_not_found_status(self, client):
        response = client.get(f"{REGION_URL}/404/0/0", params={"region": "0,0,8,8"})

        assert response.status_code == 410

    def test_failure_status(self, client, rendering_client):
        rendering_client.fail_on_acquire = True

        response = client.get(f"{REGION_URL}/1/0/0", params={"region": "0,0,8,8"})

        assert response.status_code == 502


class TestConfiguredAPIVersion:
    """API version reported by the service comes from settings"""

    @pytest.fixture
    def api_settings(self):
        return Settings(api={"api_version": "v2"})

    def test_root_reports_api_version(self, client):
        response = client.get("/")

        assert response.json()["api_version"] == "v2"


class TestHealthAPI:
    """Integration tests for service endpoints"""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"
        assert response.json()["api_version"] == "v1"

    def test_health_check(self, client):
        """Test health reports the rendering client"""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"]["rendering_client"] is True
