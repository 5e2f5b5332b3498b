"""Health check and health tip endpoints."""
from fastapi.testclient import TestClient

from healthvault.api.tips import HEALTH_TIPS


def test_health_returns_ok(client: TestClient, storage):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "storage": storage.name}


def test_health_tip_from_catalog(client: TestClient):
    titles = {tip.title for tip in HEALTH_TIPS}
    for _ in range(10):
        r = client.get("/api/health-tips")
        assert r.status_code == 200
        tip = r.json()["tip"]
        assert set(tip) == {"id", "title", "content", "category"}
        assert tip["title"] in titles


def test_health_tip_needs_no_auth(client: TestClient):
    r = client.get("/api/health-tips", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 200
