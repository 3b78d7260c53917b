"""
Tests for the learning assistant API.
"""

import pytest
from fastapi.testclient import TestClient

from learning_assistant.api.app import create_app
from learning_assistant.config import Settings
from learning_assistant.errors import UpstreamError

from conftest import FakeModelClient

TEST_REQUEST = {"topic": "Dynamic programming", "difficulty": "basic", "questionCount": 3}
CONCEPT_REQUEST = {"text": "Neural networks learn weights", "userBackground": "CS student"}


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "Learning Assistant API"


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "model": "fake-model", "modelAvailable": True}


@pytest.mark.parametrize("path", ["/api/analyze-concepts", "/api/generate-path", "/api/generate-test"])
def test_generation_endpoints_report_running(client, path):
    response = client.get(path)
    assert response.status_code == 200
    assert "running" in response.json()["message"]


def test_second_identical_request_is_served_from_cache(client, model_client):
    first = client.post("/api/generate-test", json=TEST_REQUEST)
    second = client.post("/api/generate-test", json=dict(reversed(list(TEST_REQUEST.items()))))

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.headers["X-Cache"] == "MISS"
    assert second.headers["X-Cache"] == "HIT"
    assert second.json() == first.json()
    assert first.json()["kind"] == "test-generation"
    assert len(model_client.calls) == 1

    history = client.get("/api/history", params={"limit": 2}).json()
    assert history["success"] is True
    assert history["total"] == 2
    newest, older = history["data"]
    assert newest["fromCache"] is True
    assert newest["id"] == second.headers["X-History-Id"]
    assert older["fromCache"] is False
    assert older["durationMs"] > 0
    assert older["requestType"] == "test-generation"

    cache_stats = client.get("/api/dev/cache-stats").json()
    assert cache_stats["totalEntries"] == 1
    assert cache_stats["byType"] == {"test-generation": 1}


def test_optional_question_types_default(client, model_client):
    client.post("/api/generate-test", json=TEST_REQUEST)

    _, payload = model_client.calls[0]
    assert payload["questionTypes"] == ["multiple_choice"]


def test_missing_field_is_rejected_without_side_effects(client, model_client):
    response = client.post("/api/analyze-concepts", json={"text": "Neural networks"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "userBackground" in body["error"]
    assert model_client.calls == []
    assert client.get("/api/history").json()["total"] == 0
    assert client.get("/api/dev/cache-stats").json()["totalEntries"] == 0


def test_invalid_field_is_rejected(client, model_client):
    response = client.post("/api/generate-test", json={**TEST_REQUEST, "difficulty": "impossible"})

    assert response.status_code == 400
    assert "difficulty" in response.json()["error"]
    assert model_client.calls == []


def test_upstream_failure_returns_500_and_records_nothing():
    failing = FakeModelClient(error=UpstreamError("Model returned an empty response"))
    app = create_app(Settings(history_limit=1000, log_level="INFO"), model_client=failing)

    with TestClient(app) as client:
        response = client.post("/api/analyze-concepts", json=CONCEPT_REQUEST)

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Model returned an empty response"
        assert "details" in body
        assert client.get("/api/history").json()["total"] == 0
        assert client.get("/api/dev/cache-stats").json()["totalEntries"] == 0


def test_history_entry_lookup(client):
    created = client.post("/api/analyze-concepts", json=CONCEPT_REQUEST)
    entry_id = created.headers["X-History-Id"]

    response = client.get(f"/api/history/{entry_id}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["input"] == CONCEPT_REQUEST
    assert data["output"] == created.json()

    missing = client.get("/api/history/does-not-exist")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "error": "History entry not found"}


def test_history_filters(client):
    client.post("/api/analyze-concepts", json=CONCEPT_REQUEST)
    client.post("/api/analyze-concepts", json=CONCEPT_REQUEST)
    client.post(
        "/api/generate-path",
        json={"goal": "Learn Rust", "currentLevel": "beginner", "timeframe": "2 months"},
    )

    by_type = client.get("/api/history", params={"type": "concept-analysis"}).json()
    assert by_type["total"] == 2

    cached = client.get(
        "/api/history", params={"type": "concept-analysis", "fromCache": "true"}
    ).json()
    assert cached["total"] == 1

    searched = client.get("/api/history", params={"search": "RUST"}).json()
    assert [e["requestType"] for e in searched["data"]] == ["learning-path"]

    invalid = client.get("/api/history", params={"type": "poetry"})
    assert invalid.status_code == 400


def test_history_stats_and_clear(client):
    client.post("/api/generate-test", json=TEST_REQUEST)
    client.post("/api/generate-test", json=TEST_REQUEST)

    stats = client.get("/api/history/stats").json()["data"]
    assert stats["totalEntries"] == 2
    assert stats["byType"] == {"test-generation": 2}
    assert stats["cacheHitRate"] == 50.0
    assert stats["averageDurationMs"] > 0
    assert stats["oldestEntry"] is not None

    cleared = client.delete("/api/history").json()
    assert cleared["success"] is True
    assert cleared["deletedCount"] == 2
    assert client.get("/api/history").json()["total"] == 0
    empty = client.get("/api/history/stats").json()["data"]
    assert empty["cacheHitRate"] == 0
    assert empty["newestEntry"] is None


def test_clear_cache_forces_a_new_model_call(client, model_client):
    client.post("/api/generate-test", json=TEST_REQUEST)

    cleared = client.post("/api/dev/clear-cache").json()
    assert cleared["deletedCount"] == 1

    again = client.post("/api/generate-test", json=TEST_REQUEST)
    assert again.headers["X-Cache"] == "MISS"
    assert len(model_client.calls) == 2


def test_dev_logs(client):
    client.post("/api/generate-test", json=TEST_REQUEST)
    client.post("/api/dev/clear-cache")

    logs = client.get("/api/dev/logs", params={"category": "DEV_API"}).json()
    assert logs[0]["message"] == "Cache cleared manually"
    assert logs[0]["level"] == "info"

    ai_logs = client.get("/api/dev/logs", params={"category": "AI"}).json()
    assert ai_logs[0]["message"].startswith("test-generation - Input:")
    assert ai_logs[0]["duration"] >= 1

    stats = client.get("/api/dev/log-stats").json()
    assert stats["total"] >= 2
    assert stats["byCategory"]["DEV_API"] == 1

    assert client.post("/api/dev/clear-logs").json()["success"] is True
    remaining = client.get("/api/dev/logs").json()
    assert [entry["message"] for entry in remaining] == ["Logs cleared"]
    assert remaining[0]["category"] == "SYSTEM"


def test_history_from_cache_flag(client):
    client.post("/api/analyze-concepts", json=CONCEPT_REQUEST)
    client.post("/api/analyze-concepts", json=CONCEPT_REQUEST)

    live = client.get("/api/history", params={"fromCache": "false"}).json()
    assert live["total"] == 1
    assert live["data"][0]["fromCache"] is False

    rejected = client.get("/api/history", params={"fromCache": "maybe"})
    assert rejected.status_code == 400
    assert rejected.json()["success"] is False
