"""Shared fixtures: in-memory database, API client and logged-in users."""
from __future__ import annotations

import os

import pytest

# must be set before taskboard modules are imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.pop("WIP_LIMITS_ENFORCED", None)

from fastapi.testclient import TestClient  # noqa: E402

from taskboard.database import Base, SessionLocal, engine  # noqa: E402
from taskboard.main import app  # noqa: E402

PASSWORD = "Secret#123"


@pytest.fixture(autouse=True)
def _fresh_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(client):
    """Register + log in; returns (user_id, auth headers)."""

    def _make(email: str, full_name: str = "Test User"):
        resp = client.post(
            "/auth/register",
            json={
                "email": email,
                "full_name": full_name,
                "password": PASSWORD,
                "confirm_password": PASSWORD,
            },
        )
        assert resp.status_code == 201, resp.text
        user_id = resp.json()["id"]

        resp = client.post("/auth/login", json={"email": email, "password": PASSWORD})
        assert resp.status_code == 200, resp.text
        token = resp.json()["access_token"]
        return user_id, {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def alice(make_user):
    return make_user("alice@example.com", "Alice Doe")


@pytest.fixture
def bob(make_user):
    return make_user("bob@example.com", "Bob Smith")


@pytest.fixture
def project_board(client, alice):
    """A project with its default 4-column board; returns (project, board view)."""
    _, headers = alice
    resp = client.post("/projects/", json={"name": "Website Redesign"}, headers=headers)
    assert resp.status_code == 201, resp.text
    project = resp.json()

    boards = client.get(f"/boards/project/{project['id']}", headers=headers).json()
    board = client.get(f"/boards/{boards[0]['id']}", headers=headers).json()
    return project, board
