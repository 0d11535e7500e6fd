"""Shared fixtures and test doubles for the realtime notification tests."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import replace
from uuid import uuid4

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from starlette.websockets import WebSocketState
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fitpulse.config import Settings
from fitpulse.domain.entities import Notification
from fitpulse.domain.errors import NotificationNotFoundError
from fitpulse.infrastructure.database import initialize_database
from fitpulse.infrastructure.notifications import NotificationHub, RealtimeConnection
from fitpulse.infrastructure.security import JwtCredentialVerifier, create_access_token
from fitpulse.utils import now_in_app_timezone

USER_COOKIE = "userAccessToken"


class InMemoryNotificationStore:
    """Dictionary backed store that can be told to fail."""

    def __init__(self) -> None:
        self.records: dict[str, Notification] = {}
        self.fail_create = False
        self.fail_mark_read = False
        self.fail_count = False

    async def create(self, notification: Notification) -> Notification:
        if self.fail_create:
            raise RuntimeError("storage unavailable")
        saved = replace(
            notification,
            id=notification.id or uuid4().hex,
            created_at=notification.created_at or now_in_app_timezone(),
        )
        self.records[saved.id] = saved
        return saved

    async def get(self, notification_id: str) -> Notification | None:
        return self.records.get(notification_id)

    async def count_unread(self, user_id: str) -> int:
        if self.fail_count:
            raise RuntimeError("storage unavailable")
        return sum(
            1
            for record in self.records.values()
            if record.user_id == user_id and not record.read
        )

    async def mark_as_read(
        self, notification_id: str, *, user_id: str | None = None
    ) -> Notification:
        if self.fail_mark_read:
            raise RuntimeError("storage unavailable")
        record = self.records.get(notification_id)
        if record is None or (user_id is not None and record.user_id != user_id):
            raise NotificationNotFoundError(notification_id)
        updated = record.mark_read()
        self.records[notification_id] = updated
        return updated

    async def list_for_user(
        self, user_id: str, *, page: int = 1, limit: int = 10
    ) -> Sequence[Notification]:
        records = sorted(
            (r for r in self.records.values() if r.user_id == user_id),
            key=lambda r: r.created_at,
            reverse=True,
        )
        start = (page - 1) * limit
        return records[start : start + limit]

    def seed(self, user_id: str, *, read: bool = False, message: str = "Hello") -> Notification:
        record = Notification(
            id=uuid4().hex,
            user_id=user_id,
            message=message,
            type="info",
            created_at=now_in_app_timezone(),
            read=read,
        )
        self.records[record.id] = record
        return record


class FakeWebSocket:
    """Minimal stand-in for :class:`fastapi.WebSocket` used by unit tests."""

    def __init__(self, cookies: dict[str, str] | None = None, *, fail_send: bool = False) -> None:
        self.cookies = cookies or {}
        self.sent: list[dict] = []
        self.closed_with: tuple[int, str | None] | None = None
        self.application_state = WebSocketState.CONNECTED
        self.fail_send = fail_send

    async def send_json(self, message: dict) -> None:
        if self.fail_send:
            raise RuntimeError("socket is gone")
        self.sent.append(message)

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.closed_with = (code, reason)
        self.application_state = WebSocketState.DISCONNECTED

    def events(self, event_type: str) -> list:
        return [m.get("data") for m in self.sent if m.get("type") == event_type]


@pytest.fixture()
def settings() -> Settings:
    return Settings(secret_key="test-secret-key", database_url="sqlite://")


@pytest.fixture()
def verifier(settings: Settings) -> JwtCredentialVerifier:
    return JwtCredentialVerifier(settings)


@pytest.fixture()
def make_token(settings: Settings):
    def _make(user_id: str, **claims) -> str:
        return create_access_token(
            {"id": user_id, "email": f"{user_id}@example.com", **claims},
            settings=settings,
        )

    return _make


@pytest.fixture()
def store() -> InMemoryNotificationStore:
    return InMemoryNotificationStore()


@pytest.fixture()
def hub(store: InMemoryNotificationStore, verifier: JwtCredentialVerifier) -> NotificationHub:
    return NotificationHub(
        audience="user",
        store=store,
        verifier=verifier,
        cookie_name=USER_COOKIE,
        join_event="join",
    )


@pytest.fixture()
def make_connection(make_token):
    """Build an unauthenticated connection whose cookie identifies ``user_id``."""

    def _make(user_id: str | None = None, **kwargs) -> RealtimeConnection:
        cookies = {USER_COOKIE: make_token(user_id)} if user_id else {}
        return RealtimeConnection(FakeWebSocket(cookies, **kwargs))

    return _make


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    initialize_database(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()
