"""
Shared pytest fixtures for Budget Tracker tests.
"""

import pytest
from fastapi.testclient import TestClient

from budget_tracker.config import Settings
from budget_tracker.main import create_app


@pytest.fixture(scope="session")
def log_file(tmp_path_factory):
    """One log sink for the whole run."""
    return str(tmp_path_factory.mktemp("logs") / "test.log")


@pytest.fixture
def settings(tmp_path, log_file):
    """Test settings backed by a throwaway SQLite file."""
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        ACCESS_TOKEN_SECRET="test-access-secret",
        REFRESH_TOKEN_SECRET="test-refresh-secret",
        LOG_FILE=log_file,
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def register(client, username="alice", password="s3cret-pass"):
    """Register a user and return the response."""
    return client.post("/register", json={"user": username, "pwd": password})


def login(client, username="alice", password="s3cret-pass"):
    return client.post("/login", json={"user": username, "pwd": password})


def bearer(access_token):
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def auth_headers(client):
    """Headers for a freshly registered user."""
    response = register(client)
    assert response.status_code == 201
    return bearer(response.json()["accessToken"])


SAMPLE_TRANSACTION = {
    "type": "expense",
    "category": "Food",
    "amount": 12.5,
    "description": "lunch",
    "date": "2024-03-01",
}
