import pytest
from fastapi.testclient import TestClient

from recovery_recommendation.main import _error_payload, app, get_recommendation_service


@pytest.fixture
def client(make_service, empty_catalog):
    service = make_service(catalog=empty_catalog)
    app.dependency_overrides[get_recommendation_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    j = r.json()
    assert j["status"] == "healthy"
    assert j["cache"] == {"size": 0}
    assert j["rate_limit_remaining"] == {"1m": 10, "1h": 100}


def test_recommendation(client):
    r = client.post(
        "/api/v1/recovery/recommendation",
        json={"userId": 1, "soreness": {"shoulders": 8, "hips": 3}},
    )
    assert r.status_code == 200
    recommendation = r.json()["recommendation"]
    assert recommendation["focusAreas"] == ["shoulders"]
    assert "shoulders" in recommendation["recommendations"][0]


def test_repeated_soreness_area_is_rejected(client):
    r = client.post(
        "/api/v1/recovery/recommendation",
        json={"userId": 1, "soreness": [{"area": "hips", "level": 9}, {"area": "hips", "level": 2}]},
    )
    assert r.status_code == 422

    r = client.post("/api/v1/recovery/recommendation", json={"userId": 1, "soreness": {"hips": 2}})
    assert r.status_code == 200
    assert r.json()["recommendation"]["focusAreas"] == ["full_body"]


def test_plan(client):
    r = client.post(
        "/api/v1/recovery/plan",
        json={
            "userId": 1,
            "timeAvailable": 15,
            "focusAreas": ["full_body"],
            "intensity": "light",
            "equipment": ["none"],
        },
    )
    assert r.status_code == 200
    plan = r.json()
    assert len(plan["tasks"]) == 4
    assert sum(t["durationMinutes"] for t in plan["tasks"]) == 15
    assert all(t["isCompleted"] is False for t in plan["tasks"])


def test_plan_rejects_short_session(client):
    r = client.post("/api/v1/recovery/plan", json={"userId": 1, "timeAvailable": 2})
    assert r.status_code == 422


def test_movement(client):
    r = client.post("/api/v1/movement/analyze", json={"base64Image": "aGVsbG8="})
    assert r.status_code == 200
    assert r.json()["analysis"]["quality"] == "fair"


def test_feedback(client):
    r = client.post(
        "/api/v1/feedback/analyze",
        json={
            "userId": 1,
            "sessionFeedback": [
                {
                    "sessionId": "abc",
                    "rating": 5,
                    "effectiveness": 4,
                    "difficulty": 3,
                    "enjoyment": 4,
                    "completedAt": "2024-05-10T08:00:00Z",
                }
            ],
        },
    )
    assert r.status_code == 200
    j = r.json()
    assert len(j["insights"]) == 2
    assert len(j["recommendations"]) == 2


def test_cache_clear(client):
    client.post("/api/v1/movement/analyze", json={"base64Image": "abc"})
    client.post("/api/v1/recovery/recommendation", json={"userId": 1, "soreness": {"hips": 9}})

    r = client.post("/api/v1/cache/clear")
    assert r.status_code == 200
    assert r.json()["status"] == "cleared"
    assert r.json()["cache"] == {"size": 0}


def test_error_payload():
    assert _error_payload(ValueError("bad input")) == {
        "error": "bad input",
        "type": "ValueError",
        "hint": None,
    }
    assert _error_payload(RuntimeError("x"), hint="check logs")["hint"] == "check logs"
