"""
Integration tests for the events API.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import json


FULL_EVENT = {
    "title": "Live at The Roundhouse",
    "date": "2026-11-21",
    "time": "20:00",
    "venue": "The Roundhouse",
    "location": "London, UK",
    "ticketUrl": "https://tickets.example.com/roundhouse",
    "description": "Album launch show",
    "status": "upcoming",
}


class TestCreateEvent:

    def test_minimal_event_gets_defaults(self, client, admin_headers):
        """
        Arrange: Admin token
        Act: POST /api/events with only title and date
        Assert: Optional fields are "", status is "upcoming"
        """
        response = client.post(
            "/api/events",
            json={"title": "Club show", "date": "2026-12-01"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json() == {
            "id": 1,
            "title": "Club show",
            "date": "2026-12-01",
            "time": "",
            "venue": "",
            "location": "",
            "ticketUrl": "",
            "description": "",
            "status": "upcoming",
        }

    def test_full_event_round_trips_to_disk(self, client, admin_headers, settings):
        response = client.post("/api/events", json=FULL_EVENT, headers=admin_headers)

        with open(f"{settings.data_directory}/events.json", encoding="utf-8") as fh:
            stored = json.load(fh)
        assert stored == [{"id": 1, **FULL_EVENT}]
        assert response.json() == stored[0]

    def test_cancelled_status_is_kept(self, client, admin_headers):
        response = client.post(
            "/api/events",
            json={"title": "Festival", "date": "2026-07-04", "status": "cancelled"},
            headers=admin_headers,
        )

        assert response.json()["status"] == "cancelled"

    def test_missing_title_and_date_is_400(self, client, admin_headers):
        response = client.post("/api/events", json={"venue": "Somewhere"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["missing_fields"] == ["title", "date"]
        assert client.get("/api/events").json() == []

    def test_blank_title_is_400(self, client, admin_headers):
        response = client.post(
            "/api/events", json={"title": "   ", "date": "2026-12-01"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["missing_fields"] == ["title"]

    def test_without_token_is_401(self, client):
        response = client.post("/api/events", json=FULL_EVENT)

        assert response.status_code == 401


class TestListAndDeleteEvents:

    def test_list_in_insertion_order(self, client, admin_headers):
        client.post("/api/events", json={"title": "First", "date": "2026-01-01"}, headers=admin_headers)
        client.post("/api/events", json={"title": "Second", "date": "2025-01-01"}, headers=admin_headers)

        response = client.get("/api/events")

        assert [e["title"] for e in response.json()] == ["First", "Second"]

    def test_delete(self, client, admin_headers):
        client.post("/api/events", json=FULL_EVENT, headers=admin_headers)

        response = client.delete("/api/events/1", headers=admin_headers)

        assert response.json() == {"success": True}
        assert client.get("/api/events").json() == []

    def test_delete_unknown_is_404(self, client, admin_headers):
        response = client.delete("/api/events/3", headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Event not found"}

    def test_id_reused_after_deleting_highest(self, client, admin_headers):
        client.post("/api/events", json={"title": "A", "date": "d"}, headers=admin_headers)
        client.post("/api/events", json={"title": "B", "date": "d"}, headers=admin_headers)
        client.delete("/api/events/2", headers=admin_headers)

        response = client.post("/api/events", json={"title": "C", "date": "d"}, headers=admin_headers)

        assert response.json()["id"] == 2

    def test_collections_are_independent(self, client, admin_headers):
        client.post("/api/links", json={"platform": "A", "url": "https://a"}, headers=admin_headers)

        response = client.post("/api/events", json={"title": "A", "date": "d"}, headers=admin_headers)

        assert response.json()["id"] == 1
