"""
Shared fixtures.

Every test gets its own file-backed SQLite database (foreign keys enabled) so
that concurrent page/count reads run on separate pooled connections.
"""

import os

# Must be set before netops modules read settings
os.environ["ENVIRONMENT"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite:///./netops-test.db"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["AUTO_CREATE_SCHEMA"] = "false"

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from netops_core.config import get_settings
from netops_core.db.session import Database
from netops_core.stores import ContainerStore, DeviceStore, SiteStore, UserStore

get_settings.cache_clear()

from netops_api.main import create_app  # noqa: E402


@pytest.fixture
def database(tmp_path: Path) -> Generator[Database, None, None]:
    """An open database with the schema created."""
    db = Database(f"sqlite:///{tmp_path / 'netops.db'}")
    db.open()
    db.create_all()
    yield db
    db.close()


@pytest.fixture
def user_store(database: Database) -> UserStore:
    return UserStore(database)


@pytest.fixture
def site_store(database: Database) -> SiteStore:
    return SiteStore(database)


@pytest.fixture
def container_store(database: Database) -> ContainerStore:
    return ContainerStore(database)


@pytest.fixture
def device_store(database: Database) -> DeviceStore:
    return DeviceStore(database)


@pytest.fixture
def app(database: Database):
    return create_app(database=database)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """httpx AsyncClient bound to the test app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _register(client: AsyncClient, username: str, email: str, role: str = None) -> dict:
    body = {"username": username, "email": email, "password": "secret1"}
    if role:
        body["role"] = role
    response = await client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
async def admin(client: AsyncClient) -> dict:
    """Registered admin: {token, user}."""
    return await _register(client, "admin_user", "admin@example.com", role="admin")


@pytest.fixture
async def alice(client: AsyncClient) -> dict:
    """Registered regular user: {token, user}."""
    return await _register(client, "alice", "a@x.com")


@pytest.fixture
def admin_headers(admin: dict) -> dict:
    return {"Authorization": f"Bearer {admin['token']}"}


@pytest.fixture
def user_headers(alice: dict) -> dict:
    return {"Authorization": f"Bearer {alice['token']}"}


@pytest.fixture
async def site(site_store: SiteStore) -> dict:
    return await site_store.create({"name": "HQ", "location": "Berlin"})


@pytest.fixture
async def container(container_store: ContainerStore, site: dict) -> dict:
    return await container_store.create({"name": "Rack A1", "type": "rack", "site_id": site["id"]})
