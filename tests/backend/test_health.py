"""
Tests for health check endpoints.

These tests verify:
- Basic health endpoint returns 200
- Readiness check reports database connection status
- Health degrades gracefully when MongoDB is down
"""

from unittest.mock import AsyncMock, patch


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_health_endpoint_returns_200_when_api_running(self, client):
        """Basic health check should return 200 if API is up."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"

    def test_root_lists_service(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "Clinic Records API"


class TestReadinessEndpoint:
    """Tests for GET /health/ready endpoint."""

    def test_readiness_returns_200_when_mongodb_healthy(self, client):
        """Readiness check should return 200 when MongoDB answers ping."""
        with patch("clinic.routers.health.get_mongo_client") as mock_mongo:
            mock_mongo_client = AsyncMock()
            mock_mongo_client.admin.command = AsyncMock(return_value={"ok": 1})
            mock_mongo.return_value = mock_mongo_client

            response = client.get("/health/ready")

            assert response.status_code == 200
            data = response.json()
            assert data["status"] == "healthy"
            assert data["checks"]["mongodb"] == "healthy"
            mock_mongo_client.admin.command.assert_awaited_once_with("ping")

    def test_readiness_reports_mongodb_unhealthy_when_connection_fails(self, client):
        """Readiness should report MongoDB unhealthy when it fails."""
        with patch("clinic.routers.health.get_mongo_client") as mock_mongo:
            mock_mongo.side_effect = Exception("Connection refused")

            response = client.get("/health/ready")

            assert response.status_code == 200
            data = response.json()
            assert data["status"] == "degraded"
            assert "unhealthy" in data["checks"]["mongodb"]
            assert "Connection refused" in data["checks"]["mongodb"]

    def test_readiness_response_includes_all_check_keys(self, client):
        """Readiness response should include all dependency checks."""
        with patch("clinic.routers.health.get_mongo_client") as mock_mongo:
            mock_mongo.side_effect = Exception("test")

            response = client.get("/health/ready")

            data = response.json()
            assert "checks" in data
            assert set(data["checks"]) == {"api", "mongodb"}
