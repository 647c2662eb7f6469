"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing app
os.environ.update({
    "OTEL_TRACES_EXPORTER": "none",
    "LOG_LEVEL": "WARNING",
    "DEFAULT_ADMIN_EMAIL": "admin@claronav.com",
    "DEFAULT_ADMIN_PASSWORD": "admin123",
})

from navlearn.core.storage import InMemoryRepository, get_repository  # noqa: E402
from navlearn.core.uploads import get_upload_dir  # noqa: E402

ADMIN_EMAIL = "admin@claronav.com"
ADMIN_PASSWORD = "admin123"

TRAINEE = {
    "email": "trainee@example.com",
    "first_name": "Test",
    "last_name": "Trainee",
    "serial": "NAV-1234",
    "hospital": "General Hospital",
    "password": "s3cret-pass",
}


@pytest.fixture
def repository() -> InMemoryRepository:
    """Fresh in-memory data document for each test."""
    return InMemoryRepository()


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def client(repository: InMemoryRepository, upload_dir: Path) -> Generator[TestClient, None, None]:
    """FastAPI test client backed by the in-memory repository."""
    from navlearn.main import app

    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_upload_dir] = lambda: upload_dir

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def trainee() -> dict:
    """Signup payload of the test trainee."""
    return dict(TRAINEE)


@pytest.fixture
def user_token(client: TestClient, trainee: dict) -> str:
    """Session token of a freshly signed-up trainee."""
    response = client.post("/api/signup", json=trainee)
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def admin_token(client: TestClient) -> str:
    """Session token of the seeded default admin."""
    response = client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return response.json()["token"]
