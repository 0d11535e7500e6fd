"""Tests for websocket admission and room joining."""

from unittest.mock import AsyncMock

import pytest

from fitpulse.config import Settings
from fitpulse.domain.errors import ConnectionRejectedError
from fitpulse.infrastructure.notifications import NotificationHub, RealtimeConnection
from fitpulse.infrastructure.security import create_access_token

from conftest import USER_COOKIE, FakeWebSocket


@pytest.mark.asyncio
async def test_authenticate_binds_principal(hub, make_connection):
    connection = make_connection("u1")

    principal = await hub.gateway.authenticate(connection)

    assert principal.id == "u1"
    assert principal.email == "u1@example.com"
    assert connection.user_id == "u1"


@pytest.mark.asyncio
async def test_missing_cookie_is_rejected(hub, make_connection):
    connection = make_connection()

    with pytest.raises(ConnectionRejectedError) as exc_info:
        await hub.gateway.authenticate(connection)

    assert exc_info.value.code == "AUTH_USER_NOT_AUTHENTICATED"
    assert connection.user_id is None


@pytest.mark.asyncio
async def test_token_signed_with_other_secret_is_rejected(hub):
    forged = create_access_token(
        {"id": "u1"}, settings=Settings(secret_key="someone-else", database_url="sqlite://")
    )
    connection = RealtimeConnection(FakeWebSocket({USER_COOKIE: forged}))

    with pytest.raises(ConnectionRejectedError) as exc_info:
        await hub.gateway.authenticate(connection)

    assert exc_info.value.code == "AUTH_INVALID_ACCESS_TOKEN"
    assert exc_info.value.message == "Invalid access token"


@pytest.mark.asyncio
async def test_verifier_crash_is_reported_as_invalid_token(store, make_connection):
    verifier = AsyncMock()
    verifier.verify.side_effect = ConnectionError("identity provider down")
    hub = NotificationHub(
        audience="user", store=store, verifier=verifier, cookie_name=USER_COOKIE
    )

    with pytest.raises(ConnectionRejectedError) as exc_info:
        await hub.gateway.authenticate(make_connection("u1"))

    assert exc_info.value.code == "AUTH_INVALID_ACCESS_TOKEN"


@pytest.mark.asyncio
async def test_join_own_room_registers_and_sends_unread_count(hub, store, make_connection):
    store.seed("u1")
    store.seed("u1")
    store.seed("u1", read=True)
    connection = make_connection("u1")
    await hub.gateway.authenticate(connection)

    joined = await hub.gateway.join(connection, "u1")

    assert joined is True
    assert hub.registry.is_online("u1")
    assert hub.bus.subscriber_count("u1") == 1
    assert connection.websocket.events("unreadCount") == [2]


@pytest.mark.asyncio
async def test_join_accepts_numeric_identifier(hub, store, make_connection):
    connection = make_connection("42")
    await hub.gateway.authenticate(connection)

    assert await hub.gateway.join(connection, 42) is True
    assert hub.registry.is_online("42")


@pytest.mark.asyncio
async def test_join_for_other_user_closes_connection(hub, make_connection):
    connection = make_connection("u1")
    await hub.gateway.authenticate(connection)

    joined = await hub.gateway.join(connection, "u2")

    assert joined is False
    assert connection.websocket.closed_with == (1008, "NOTIFICATION_UNAUTHORIZED")
    assert not hub.registry.is_online("u1")
    assert not hub.registry.is_online("u2")
    assert hub.bus.subscriber_count("u2") == 0


@pytest.mark.asyncio
async def test_join_survives_unread_count_failure(hub, store, make_connection):
    store.fail_count = True
    connection = make_connection("u1")
    await hub.gateway.authenticate(connection)

    assert await hub.gateway.join(connection, "u1") is True
    assert hub.registry.is_online("u1")
    assert connection.websocket.sent == []


@pytest.mark.asyncio
async def test_disconnect_removes_presence_and_subscriptions(hub, make_connection):
    connection = make_connection("u1")
    await hub.gateway.authenticate(connection)
    await hub.gateway.join(connection, "u1")

    assert hub.gateway.disconnect(connection) == "u1"
    assert not hub.registry.is_online("u1")
    assert hub.bus.subscriber_count("u1") == 0


def test_disconnect_before_join_is_harmless(hub, make_connection):
    assert hub.gateway.disconnect(make_connection("u1")) is None
