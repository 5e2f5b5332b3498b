"""Wellness: mood submission, validation, owner-scoped listing."""
from fastapi.testclient import TestClient


def test_submit_mood_listed_first(client: TestClient, auth_headers: dict):
    client.post("/api/wellness", json={"mood": 5}, headers=auth_headers)
    r = client.post("/api/wellness", json={"mood": 3, "notes": "felt fine"}, headers=auth_headers)
    assert r.status_code == 201
    entry = r.json()["entry"]
    assert entry["mood"] == 3
    assert entry["notes"] == "felt fine"
    assert "createdAt" in entry and "userId" in entry
    entries = client.get("/api/wellness", headers=auth_headers).json()["entries"]
    assert entries[0]["id"] == entry["id"]
    assert [e["mood"] for e in entries] == [3, 5]


def test_notes_are_optional(client: TestClient, auth_headers: dict):
    r = client.post("/api/wellness", json={"mood": 1}, headers=auth_headers)
    assert r.status_code == 201
    assert r.json()["entry"]["notes"] is None


def test_mood_out_of_range_rejected(client: TestClient, auth_headers: dict):
    for mood in (0, 6, -1, 3.5, "3", True, None):
        r = client.post("/api/wellness", json={"mood": mood}, headers=auth_headers)
        assert r.status_code == 400, mood
    r = client.post("/api/wellness", json={"notes": "no mood"}, headers=auth_headers)
    assert r.status_code == 400
    assert client.get("/api/wellness", headers=auth_headers).json() == {"entries": []}


def test_wellness_is_owner_scoped(client: TestClient, auth_headers: dict, other_headers: dict):
    client.post("/api/wellness", json={"mood": 4, "notes": "private"}, headers=auth_headers)
    r = client.get("/api/wellness", headers=other_headers)
    assert r.status_code == 200
    assert r.json()["entries"] == []


def test_wellness_requires_auth(client: TestClient):
    assert client.get("/api/wellness").status_code == 401
    assert client.post("/api/wellness", json={"mood": 3}).status_code == 401
