"""Shared fixtures: an application wired to a throwaway content file and public dir."""

import os
import tempfile

import pytest

# app.main builds a module-level app on import; keep it out of the repo tree.
_SCRATCH = tempfile.mkdtemp(prefix="khaudum-tests-")
os.environ.setdefault("CONTENT_PATH", os.path.join(_SCRATCH, "content.json"))
os.environ.setdefault("PUBLIC_DIR", os.path.join(_SCRATCH, "public"))

from fastapi.testclient import TestClient  # noqa: E402

from app.config import Settings  # noqa: E402
from app.main import create_app  # noqa: E402
from app.routers.public import limiter  # noqa: E402
from app.services.auth import hash_password  # noqa: E402

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct horse battery"
ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Clear the slowapi in-memory counter before every test."""
    limiter._storage.reset()
    yield


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        content_path=tmp_path / "content.json",
        public_dir=tmp_path / "public",
        session_secret="test-secret",
        admin_username=ADMIN_USERNAME,
        admin_password_hash=ADMIN_PASSWORD_HASH,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_client(client) -> TestClient:
    resp = client.post(
        "/login",
        data={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    return client


@pytest.fixture
def admin_credentials() -> dict:
    return {"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
