# tests/api/test_health.py
"""Tests for the health, version and config endpoints."""

from clusterinfo import __version__


class TestHealthEndpoint:
    """Tests for GET /api/v1/health."""

    def test_health_returns_status_ok(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}


class TestVersionEndpoint:
    def test_version(self, client):
        response = client.get("/api/v1/version")
        assert response.status_code == 200
        assert response.json()["version"] == __version__


class TestConfigEndpoint:
    def test_config_hides_secrets(self, client):
        response = client.get("/api/v1/config")
        assert response.status_code == 200
        data = response.json()
        assert data["db_type"] == "sqlite"
        assert "reconcile_interval" in data
        assert not any("token" in key for key in data)
        assert "inventory_api_url" not in data
