"""
Tests for the HTTP endpoints.

Each test gets a fresh application with its own in-memory store (see
``conftest.client``), so no state leaks between tests.
"""

import logging
import uuid

from fastapi.testclient import TestClient

from idea_board_api.app.core.config import Settings
from idea_board_api.app.main import create_app
from idea_board_api.app.services.idea_store import MemoryIdeaStore


class TestHealthEndpoint:
    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "OK", "message": "Idea Board API is running"}

    def test_health_does_not_touch_store(self, broken_client):
        assert broken_client.get("/api/health").status_code == 200


class TestCreateIdea:
    def test_create_returns_201(self, client):
        response = client.post("/api/ideas", json={"text": "Build a thing"})

        assert response.status_code == 201
        body = response.json()
        assert body["text"] == "Build a thing"
        assert body["upvotes"] == 0
        assert uuid.UUID(body["id"])
        assert set(body) == {"id", "text", "upvotes", "created_at"}

    def test_create_stores_trimmed_text(self, client):
        response = client.post("/api/ideas", json={"text": "   padded idea  "})

        assert response.status_code == 201
        assert response.json()["text"] == "padded idea"

    def test_empty_text_rejected(self, client):
        response = client.post("/api/ideas", json={"text": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "Idea text is required"}

    def test_whitespace_text_rejected(self, client):
        response = client.post("/api/ideas", json={"text": "   \n\t "})

        assert response.status_code == 400
        assert response.json() == {"error": "Idea text is required"}

    def test_missing_text_rejected(self, client):
        response = client.post("/api/ideas", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Idea text is required"}

    def test_missing_body_rejected_as_required(self, client, memory_store):
        response = client.post("/api/ideas")

        assert response.status_code == 400
        assert response.json() == {"error": "Idea text is required"}
        assert memory_store.list() == []

    def test_null_body_rejected_as_required(self, client):
        response = client.post(
            "/api/ideas",
            content="null",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Idea text is required"}

    def test_280_characters_accepted(self, client):
        response = client.post("/api/ideas", json={"text": "a" * 280})

        assert response.status_code == 201

    def test_281_characters_rejected(self, client):
        response = client.post("/api/ideas", json={"text": "a" * 281})

        assert response.status_code == 400
        assert response.json() == {"error": "Idea text must be 280 characters or less"}

    def test_length_limit_counts_surrounding_whitespace(self, client):
        response = client.post("/api/ideas", json={"text": " " + "a" * 280})

        assert response.status_code == 400
        assert response.json() == {"error": "Idea text must be 280 characters or less"}

    def test_non_string_text_rejected(self, client):
        response = client.post("/api/ideas", json={"text": 42})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    def test_malformed_json_rejected(self, client):
        response = client.post(
            "/api/ideas",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_rejected_ideas_are_not_stored(self, client, memory_store):
        client.post("/api/ideas", json={"text": ""})
        client.post("/api/ideas", json={"text": "a" * 281})

        assert memory_store.list() == []


class TestListIdeas:
    def test_list_empty(self, client):
        response = client.get("/api/ideas")

        assert response.status_code == 200
        assert response.json() == []

    def test_created_idea_appears_in_list(self, client):
        created = client.post("/api/ideas", json={"text": "Round trip"}).json()

        [listed] = client.get("/api/ideas").json()
        assert listed["id"] == created["id"]
        assert listed["text"] == "Round trip"
        assert listed["upvotes"] == 0

    def test_list_sorted_by_upvotes_then_newest(self, client):
        ids = [client.post("/api/ideas", json={"text": f"idea {n}"}).json()["id"] for n in range(3)]
        client.post(f"/api/ideas/{ids[0]}/upvote")

        listed = [idea["id"] for idea in client.get("/api/ideas").json()]
        assert listed == [ids[0], ids[2], ids[1]]


class TestUpvoteIdea:
    def test_upvote_twice_scenario(self, client):
        created = client.post("/api/ideas", json={"text": "Build a thing"})
        assert created.status_code == 201
        idea_id = created.json()["id"]

        first = client.post(f"/api/ideas/{idea_id}/upvote")
        second = client.post(f"/api/ideas/{idea_id}/upvote")

        assert first.status_code == 200
        assert first.json()["upvotes"] == 1
        assert second.json()["upvotes"] == 2
        [listed] = client.get("/api/ideas").json()
        assert listed["upvotes"] == 2
        assert listed["text"] == "Build a thing"
        assert listed["created_at"] == created.json()["created_at"]

    def test_upvote_unknown_id_returns_404(self, client):
        client.post("/api/ideas", json={"text": "Build a thing"})

        response = client.post(f"/api/ideas/{uuid.uuid4()}/upvote")

        assert response.status_code == 404
        assert response.json() == {"error": "Idea not found"}
        [listed] = client.get("/api/ideas").json()
        assert listed["upvotes"] == 0


class TestStoreFailures:
    def test_list_failure_is_generic(self, broken_client):
        response = broken_client.get("/api/ideas")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch ideas"}

    def test_create_failure_is_generic(self, broken_client):
        response = broken_client.post("/api/ideas", json={"text": "Build a thing"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create idea"}
        assert "10.0.0.5" not in response.text

    def test_upvote_failure_is_generic(self, broken_client):
        response = broken_client.post(f"/api/ideas/{uuid.uuid4()}/upvote")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to upvote idea"}

    def test_validation_runs_before_store(self, broken_client):
        response = broken_client.post("/api/ideas", json={"text": ""})

        assert response.status_code == 400


class TestAppSetup:
    def test_cors_headers(self, client):
        response = client.get("/api/health", headers={"Origin": "http://localhost:3000"})

        assert response.headers["access-control-allow-origin"] == "*"

    def test_unknown_route_uses_error_body(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert "error" in response.json()

    def test_sqlite_backed_app(self, tmp_path):
        config = Settings(idea_store="sqlite", database_url=str(tmp_path / "api.db"))
        with TestClient(create_app(config=config)) as client:
            idea_id = client.post("/api/ideas", json={"text": "Durable"}).json()["id"]
            client.post(f"/api/ideas/{idea_id}/upvote")

        with TestClient(create_app(config=config)) as client:
            [listed] = client.get("/api/ideas").json()

        assert listed["id"] == idea_id
        assert listed["upvotes"] == 1

    def test_unreachable_store_is_logged_at_startup(self, caplog):
        store = MemoryIdeaStore()
        store.ping = lambda: False

        with caplog.at_level(logging.WARNING, logger="idea_board_api.app.main"):
            with TestClient(create_app(store=store, config=Settings())) as client:
                assert client.get("/api/health").status_code == 200

        assert "not reachable" in caplog.text

    def test_reachable_store_logs_no_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="idea_board_api.app.main"):
            with TestClient(create_app(store=MemoryIdeaStore(), config=Settings())):
                pass

        assert "not reachable" not in caplog.text
