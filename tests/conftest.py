"""
Pytest fixtures: test client, auth headers, fake database client.
"""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from core.config import get_settings
from core.database import get_database_connection
from main import create_app


@pytest.fixture(autouse=True)
def _reset_cached_singletons() -> Iterator[None]:
    """Settings and the database handle are process-wide; start each test clean."""
    get_settings.cache_clear()
    get_database_connection.cache_clear()
    yield
    get_settings.cache_clear()
    get_database_connection.cache_clear()


@pytest.fixture(autouse=True)
def _public_dns(monkeypatch) -> None:
    """Hostnames resolve to a public address unless a test says otherwise; no real DNS."""

    async def resolve(host: str) -> list[str]:
        return ["93.184.216.34"]

    monkeypatch.setattr("utils.download._resolve_addresses", resolve)


@pytest.fixture
def client() -> TestClient:
    """Test client with default app. Use app.dependency_overrides for settings/database."""
    return TestClient(create_app())


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Bearer header signed with the test settings' secret."""
    from core.security import create_access_token

    token = create_access_token("test-user-id")
    return {"Authorization": f"Bearer {token}"}


class FakeAdmin:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.commands: list[str] = []

    async def command(self, name: str) -> dict:
        self.commands.append(name)
        if self.fail:
            raise ConnectionError("server unavailable")
        return {"ok": 1}


class FakeMongoClient:
    """Stands in for AsyncMongoClient: ping, item access, close."""

    instances: list["FakeMongoClient"] = []

    def __init__(self, url: str, fail: bool = False) -> None:
        self.url = url
        self.admin = FakeAdmin(fail=fail)
        self.closed = False
        FakeMongoClient.instances.append(self)

    def __getitem__(self, name: str) -> dict:
        return {"name": name, "client": self}

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_mongo() -> type[FakeMongoClient]:
    FakeMongoClient.instances = []
    return FakeMongoClient
