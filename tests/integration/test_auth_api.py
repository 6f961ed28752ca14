"""Integration tests for session cookies across the HTTP layer."""

from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient

from trip_planner.kernel.identity.session import get_session_authenticator


@pytest_asyncio.fixture
async def frozen_app(authenticator):
    """App whose authenticator runs on the test clock."""
    from trip_planner.main import app

    app.dependency_overrides[get_session_authenticator] = lambda: authenticator
    try:
        yield app
    finally:
        app.dependency_overrides.pop(get_session_authenticator, None)


@pytest.mark.asyncio
async def test_cookie_expires_after_seven_days(frozen_app, client: AsyncClient, clock, make_user, log_in):
    user = await make_user()
    r = await log_in(client, user.username)
    assert r.status_code == 200

    clock.advance(timedelta(days=6, hours=23))
    assert (await client.get("/api/todos")).status_code == 200

    clock.advance(timedelta(days=1))
    r = await client.get("/api/todos")
    assert r.status_code == 401
    assert r.json() == {"detail": "Not authenticated"}


@pytest.mark.asyncio
async def test_subject_comes_from_credential(frozen_app, client: AsyncClient, authenticator, make_user):
    """The cookie alone decides who the caller is."""
    user = await make_user("Ana")
    client.cookies.set("token", authenticator.issue(user.id, user.username).token)

    r = await client.get("/api/me")
    assert r.status_code == 200
    assert r.json()["id"] == user.id


@pytest.mark.asyncio
async def test_authorization_header_is_ignored(frozen_app, client: AsyncClient, authenticator, make_user):
    user = await make_user()
    token = authenticator.issue(user.id, user.username).token

    r = await client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
