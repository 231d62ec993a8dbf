"""Shared fixtures: an isolated app per test, plus login helpers."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from gallery.core.config import Settings
from gallery.main import create_app
from tests.imaging import make_jpeg

ADMIN_USER = "admin"
ADMIN_PASSWORD = "admin-secret"
USER_PASSWORD = "password123"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        uploads_dir=tmp_path / "uploads",
        admin_user=ADMIN_USER,
        admin_password=ADMIN_PASSWORD,
        allow_anonymous_uploads=True,
    )


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def login(client: TestClient, identifier: str, password: str) -> dict[str, str]:
    """Log in and return headers carrying that session.

    The client's own cookie jar is cleared so that requests without these
    headers stay anonymous.
    """
    response = client.post("/api/login", json={"email": identifier, "password": password})
    assert response.status_code == 200, response.text
    session_id = response.cookies["gallery_session"]
    client.cookies.clear()
    return {"Cookie": f"gallery_session={session_id}"}


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    return login(client, ADMIN_USER, ADMIN_PASSWORD)


def create_user(
    client: TestClient,
    admin_headers: dict[str, str],
    email: str,
    password: str = USER_PASSWORD,
) -> tuple[int, dict[str, str]]:
    """Sign up, approve and log in a user. Returns (user_id, headers)."""
    response = client.post("/api/signup", json={"email": email, "password": password})
    assert response.status_code == 201, response.text

    pending = client.get("/api/admin/pending-users", headers=admin_headers).json()["users"]
    user_id = next(u["id"] for u in pending if u["email"] == email.lower())
    approved = client.post(
        "/api/admin/approve-user", json={"userId": user_id}, headers=admin_headers
    )
    assert approved.status_code == 200, approved.text

    return user_id, login(client, email, password)


def upload(
    client: TestClient,
    headers: dict[str, str] | None = None,
    name: str = "photo.jpg",
    data: bytes | None = None,
    **fields: object,
):
    """POST one image to the upload endpoint."""
    if data is None:
        data = make_jpeg()
    form = {key: str(value) for key, value in fields.items() if value is not None}
    return client.post(
        "/api/images",
        files={"image": (name, data, "image/jpeg")},
        data=form,
        headers=headers or {},
    )


def create_album(
    client: TestClient,
    headers: dict[str, str],
    name: str = "Holiday",
    is_public: bool = True,
) -> int:
    response = client.post(
        "/api/albums", json={"name": name, "is_public": is_public}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


def list_images(client: TestClient, headers: dict[str, str] | None = None, **params: object):
    response = client.get("/api/images", params=params, headers=headers or {})
    assert response.status_code == 200, response.text
    return response.json()
