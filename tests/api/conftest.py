"""Shared fixtures for API tests."""

import base64

import pytest
from fastapi.testclient import TestClient

from storefront.infrastructure.config import Settings
from storefront.main import create_app

ADMIN_KEY = "test-admin-key"
SVG_BYTES = b'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"/>'


@pytest.fixture
def api_settings(database_url: str) -> Settings:
    """Settings pointing at a fresh SQLite database."""
    return Settings(
        database_url=database_url,
        create_tables=True,
        admin_api_key=ADMIN_KEY,
        log_level="WARNING",
    )


@pytest.fixture
def client(api_settings: Settings, icon_storage) -> TestClient:
    """Create test client without authentication."""
    with TestClient(create_app(api_settings, icon_storage=icon_storage)) as c:
        yield c


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Get admin authentication headers."""
    return {
        "Authorization": f"Bearer {ADMIN_KEY}",
        "X-Actor": "admin@example.com",
    }


@pytest.fixture
def svg_upload() -> dict[str, str]:
    """Icon upload payload."""
    return {
        "filename": "helmet.svg",
        "content_type": "image/svg+xml",
        "data": base64.b64encode(SVG_BYTES).decode("ascii"),
    }


@pytest.fixture
def riding_gear(client: TestClient, auth_headers: dict[str, str]) -> dict:
    """Create the Riding Gear section."""
    response = client.post("/sections", json={"name": "Riding Gear"}, headers=auth_headers)
    assert response.status_code == 201
    return response.json()
