"""
Pytest fixtures for trip planner tests.

Tests run against a temp-file SQLite database so the app and the fixtures
share one database across connections.
"""

import os
import tempfile
import uuid
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Awaitable, Callable

# Configure before any trip_planner import reads settings
_tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
_tmp.close()
TEST_DB_PATH = _tmp.name
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["COOKIE_SECURE"] = "false"
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only"

from trip_planner.config import get_settings
get_settings.cache_clear()

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from trip_planner.database import async_session_maker, init_db
from trip_planner.kernel.identity import password as password_module
from trip_planner.kernel.identity.identity_service import IdentityService
from trip_planner.kernel.identity.session import SessionAuthenticator
from trip_planner.kernel.models.user import User

TEST_PASSWORD = "TripPass123"


class FrozenClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


def pytest_sessionfinish(session, exitstatus):
    """Clean up temp DB file after test run."""
    for suffix in ("", "-wal", "-shm"):
        path = TEST_DB_PATH + suffix
        if os.path.exists(path):
            os.unlink(path)


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Minimum bcrypt cost keeps user creation quick."""
    monkeypatch.setattr(password_module, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def authenticator(clock: FrozenClock) -> SessionAuthenticator:
    """Authenticator with a controllable clock."""
    return SessionAuthenticator(
        secret_key="test-secret-key-for-testing-only",
        algorithm="HS256",
        lifetime=timedelta(days=7),
        cookie_name="token",
        cookie_secure=False,
        clock=clock,
    )


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Session on the test database, rolled back afterwards."""
    await init_db()
    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def make_user() -> Callable[..., Awaitable[User]]:
    """Factory that commits a new user with a unique name."""
    await init_db()

    async def _make(display_name: str = "Traveller") -> User:
        username = f"user-{uuid.uuid4().hex[:8]}"
        async with async_session_maker() as session:
            user = await IdentityService(session).create_user(username, TEST_PASSWORD, display_name)
            await session.commit()
        return user

    return _make


@pytest_asyncio.fixture
async def client_factory() -> AsyncGenerator[Callable[[], AsyncClient], None]:
    """Build independent clients (one cookie jar each) against the app."""
    from trip_planner.main import app

    await init_db()
    clients: list[AsyncClient] = []

    def _make() -> AsyncClient:
        ac = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(ac)
        return ac

    try:
        yield _make
    finally:
        for ac in clients:
            await ac.aclose()


@pytest_asyncio.fixture
async def client(client_factory) -> AsyncClient:
    return client_factory()


@pytest.fixture
def log_in():
    """Log in and return the response; the cookie lands in the client's jar."""

    async def _log_in(client: AsyncClient, username: str, password: str = TEST_PASSWORD):
        return await client.post(
            "/api/login",
            json={"username": username, "password": password},
        )

    return _log_in
