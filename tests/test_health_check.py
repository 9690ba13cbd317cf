from unittest import mock

from django.db import OperationalError, connections


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert "services" in data

    def test_health_check_reports_database_status(self, client):
        response = client.get("/health")
        data = response.json()
        assert data["services"]["database"]["status"] == "up"
        assert data["services"]["database"]["vendor"] == "sqlite"
        assert "response_time_ms" in data["services"]["database"]

    def test_health_check_returns_503_when_database_down(self, client):
        # teardown needs a working connection: patch the request only
        with mock.patch.object(
            connections["default"],
            "ensure_connection",
            side_effect=OperationalError("connection refused"),
        ):
            response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["services"]["database"] == {"status": "down"}
        assert connections["default"].ensure_connection() is None
