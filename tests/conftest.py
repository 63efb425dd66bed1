import asyncio
import os
import tempfile
from collections.abc import AsyncGenerator, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Ensure the test database is configured before importing the app
_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="storefront-tests-"))
os.environ["DB_DSN"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR / 'test.db'}"
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DEBUG", "false")

from storefront.core.database import create_tables, drop_tables  # noqa: E402
from storefront.core.session_store import SessionStore  # noqa: E402
from storefront.main import create_app  # noqa: E402


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class PlainTextHasher:
    """Fast stand-in for Argon2 in service-level tests."""

    def hash(self, password: str) -> str:
        return f"plain${password}"

    def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == f"plain${password}"


async def _reset_schema() -> None:
    await drop_tables()
    await create_tables()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def session_store(clock: FakeClock) -> SessionStore:
    return SessionStore(clock=clock)


@pytest.fixture()
def hasher() -> PlainTextHasher:
    return PlainTextHasher()


@pytest_asyncio.fixture()
async def db() -> AsyncGenerator[None, None]:
    """Reset schema for each async test."""
    await _reset_schema()
    yield


@pytest.fixture()
def fresh_db() -> None:
    """Reset schema for each sync test."""
    asyncio.run(_reset_schema())


@pytest.fixture()
def app(fresh_db: None) -> FastAPI:
    return create_app()


@pytest.fixture()
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """FastAPI test client that also triggers startup/shutdown hooks."""
    with TestClient(app) as test_client:
        yield test_client


def register_and_login(
    client: TestClient,
    username: str = "alice",
    email: str = "alice@example.com",
    password: str = "secret1",
) -> str:
    response = client.post(
        "/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    response = client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["data"]["sessionToken"]


@pytest.fixture()
def auth_headers(client: TestClient) -> dict[str, str]:
    return {"X-Session-Token": register_and_login(client)}
