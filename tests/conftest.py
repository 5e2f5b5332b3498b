"""Pytest fixtures: app per test on each storage backend, with an in-memory file store."""
import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# Must be set before healthvault is imported
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["ENVIRONMENT"] = "development"
os.environ["DATABASE_URL"] = ""
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="healthvault-test-")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
# High enough that no ordinary test trips the auth limiter
os.environ.setdefault("RATE_LIMIT_AUTH_PER_MINUTE", "1000")

from healthvault.core.config import settings
from healthvault.core.rate_limit import limiter
from healthvault.files import InMemoryFileStore
from healthvault.main import create_app
from healthvault.storage import MemoryStorage, SqlStorage


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    if request.param == "memory":
        return MemoryStorage()
    return SqlStorage("sqlite:///:memory:")


@pytest.fixture
def file_store():
    return InMemoryFileStore()


@pytest.fixture
def client(storage, file_store):
    """TestClient; the lifespan runs storage.init()/close()."""
    limiter.reset()
    app = create_app(settings, storage=storage, file_store=file_store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register_user(client):
    """Registers a user and returns (json body, Authorization headers)."""

    def _register(username: str, email: str, password: str = "secret1"):
        r = client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert r.status_code == 201, f"Register failed: {r.status_code} {r.text}"
        body = r.json()
        return body, {"Authorization": f"Bearer {body['token']}"}

    return _register


@pytest.fixture
def auth_headers(register_user):
    _, headers = register_user("ann", "a@x.com")
    return headers


@pytest.fixture
def other_headers(register_user):
    _, headers = register_user("bob", "b@x.com")
    return headers
