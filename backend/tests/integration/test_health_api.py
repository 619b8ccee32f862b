"""
Integration tests for the health endpoint, the root endpoint and unknown
API routes.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import uuid
from datetime import datetime


class TestHealthEndpoint:

    def test_health_ok(self, client):
        """
        Arrange: Empty data directory
        Act: GET /api/health
        Assert: 200, status ok, both collections readable and empty
        """
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))
        assert data["collections"] == {
            "links": {"readable": True, "records": 0},
            "events": {"readable": True, "records": 0},
        }

    def test_health_counts_records(self, client, admin_headers):
        client.post("/api/links", json={"platform": "A", "url": "https://a"}, headers=admin_headers)

        response = client.get("/api/health")

        assert response.json()["collections"]["links"]["records"] == 1

    def test_health_degraded_on_unreadable_file(self, client, settings):
        # Arrange
        with open(f"{settings.data_directory}/events.json", "w", encoding="utf-8") as fh:
            fh.write("{ not json")

        # Act
        response = client.get("/api/health")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["collections"]["events"] == {"readable": False, "records": 0}
        assert data["collections"]["links"]["readable"] is True

    def test_unreadable_file_served_as_empty(self, client, settings):
        with open(f"{settings.data_directory}/links.json", "w", encoding="utf-8") as fh:
            fh.write("not json at all")

        response = client.get("/api/links")

        assert response.status_code == 200
        assert response.json() == []

    def test_request_id_header(self, client):
        response = client.get("/api/health")

        uuid.UUID(response.headers["X-Request-ID"])


class TestRootAndUnknownRoutes:

    def test_root(self, client, settings):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == settings.musician_name

    def test_unknown_api_route_is_404(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    def test_malformed_body_is_422(self, client, admin_headers):
        response = client.post(
            "/api/links",
            content="not json",
            headers={**admin_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "Invalid request"
