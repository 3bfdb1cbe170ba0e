# tests/api/test_health_endpoint.py
from fastapi.testclient import TestClient

from app.main import app
from app.api.dependencies import get_settings


class TestHealthEndpoints:
    """Test health endpoints"""

    def test_basic_health(self):
        response = TestClient(app).get("/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_health_reports_missing_credentials(self, unconfigured_settings):
        app.dependency_overrides[get_settings] = lambda: unconfigured_settings
        try:
            response = TestClient(app).get("/health/detailed")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["services"]["llm"] == "missing"
        assert "overall" not in data["services"]

    def test_detailed_health_when_configured(self, test_settings):
        app.dependency_overrides[get_settings] = lambda: test_settings
        try:
            response = TestClient(app).get("/health/detailed")
        finally:
            app.dependency_overrides.clear()

        assert response.json()["status"] == "healthy"

    def test_liveness(self):
        response = TestClient(app).get("/health/live")

        assert response.json()["status"] == "alive"

    def test_root(self):
        response = TestClient(app).get("/")

        assert response.json()["status"] == "running"
