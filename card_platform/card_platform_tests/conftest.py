"""
Pytest fixtures for the card service tests.

Every test gets a fresh application built by the factory against its own
SQLite file, so no PostgreSQL server is needed.
"""
import pytest
from fastapi.testclient import TestClient

from card_service.config import Settings
from card_service.main import create_app

TEST_SECRET = "card-service-test-secret-0123456789"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'cards.db'}",
        JWT_SECRET=TEST_SECRET,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register_user(client):
    def _register(username="alice", password="secret1"):
        response = client.post("/register", json={"username": username, "password": password})
        assert response.status_code == 200
        return response.json()["user"]

    return _register
