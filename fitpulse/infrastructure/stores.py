"""Asynchronous notification store backed by the SQLAlchemy repository."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import partial
from typing import TypeVar

from anyio import to_thread
from sqlalchemy.orm import Session

from fitpulse.domain.entities import Notification
from fitpulse.infrastructure.repositories import NotificationRepository

T = TypeVar("T")


class SqlAlchemyNotificationStore:
    """Expose :class:`NotificationRepository` behind awaitable methods.

    Each call opens its own session and runs in a worker thread so the event
    loop keeps serving other connections while the database works.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    async def create(self, notification: Notification) -> Notification:
        return await self._run(lambda repo: repo.create(notification))

    async def get(self, notification_id: str) -> Notification | None:
        return await self._run(lambda repo: repo.get(notification_id))

    async def count_unread(self, user_id: str) -> int:
        return await self._run(lambda repo: repo.count_unread(user_id))

    async def mark_as_read(
        self, notification_id: str, *, user_id: str | None = None
    ) -> Notification:
        return await self._run(
            lambda repo: repo.mark_as_read(notification_id, user_id=user_id)
        )

    async def list_for_user(
        self, user_id: str, *, page: int = 1, limit: int = 10
    ) -> Sequence[Notification]:
        return await self._run(
            lambda repo: repo.list_for_user(user_id, page=page, limit=limit)
        )

    async def _run(self, operation: Callable[[NotificationRepository], T]) -> T:
        return await to_thread.run_sync(partial(self._execute, operation))

    def _execute(self, operation: Callable[[NotificationRepository], T]) -> T:
        session = self._session_factory()
        try:
            return operation(NotificationRepository(session))
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


__all__ = ["SqlAlchemyNotificationStore"]
