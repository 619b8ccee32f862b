"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests
- Temporary data directories and settings
- Repositories, caller contexts and an HTTP test client
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest


# Set test environment variables BEFORE any imports
# This must happen first so the module-level app loads with test values
os.environ["SECRET_KEY"] = "test_secret_key_at_least_32_characters_long_for_jwt"
os.environ["ADMIN_PASSWORD"] = "testpassword123"
os.environ["DATA_DIRECTORY"] = tempfile.mkdtemp(prefix="linkhub-test-")
os.environ["DISABLE_RATE_LIMIT"] = "true"  # Disable rate limiting for tests
os.environ["LOG_JSON"] = "false"

# Add backend directory to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from fastapi.testclient import TestClient  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from linkhub.core.config import Settings  # noqa: E402
from linkhub.main import create_app  # noqa: E402
from linkhub.repositories.events import EventRepository  # noqa: E402
from linkhub.repositories.links import LinkRepository  # noqa: E402
from linkhub.store.gate import CallerContext  # noqa: E402

TEST_ADMIN_PASSWORD = "testpassword123"
TEST_SECRET_KEY = "test_secret_key_at_least_32_characters_long_for_jwt"


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Empty data directory for one test."""
    directory = tmp_path / "data"
    directory.mkdir()
    return directory


@pytest.fixture
def settings(data_dir: Path) -> Settings:
    """Settings pointing at the per-test data directory."""
    return Settings(
        data_directory=str(data_dir),
        secret_key=TEST_SECRET_KEY,
        admin_password=TEST_ADMIN_PASSWORD,
        disable_rate_limit=True,
        log_json=False,
    )


@pytest.fixture
def admin_context() -> CallerContext:
    return CallerContext.admin(request_id="test-request")


@pytest.fixture
def anonymous_context() -> CallerContext:
    return CallerContext.anonymous(request_id="test-request")


@pytest.fixture
def link_repo(data_dir: Path) -> LinkRepository:
    return LinkRepository(data_dir)


@pytest.fixture
def event_repo(data_dir: Path) -> EventRepository:
    return EventRepository(data_dir)


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """TestClient with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_token(client: TestClient) -> str:
    """Log in with the admin password and return the access token."""
    response = client.post("/api/admin/login", json={"password": TEST_ADMIN_PASSWORD})
    assert response.status_code == 200
    return response.json()["access_token"]


@pytest.fixture
def admin_headers(admin_token: str) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
async def async_client(app):
    """
    httpx AsyncClient bound to the app over ASGI.

    The lifespan does not run here; the data directory already exists.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def async_admin_headers(async_client) -> dict:
    response = await async_client.post("/api/admin/login", json={"password": TEST_ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
