"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import uuid4

from sqlalchemy import func
from sqlalchemy.orm import Session

from fitpulse.domain.entities import Notification
from fitpulse.domain.errors import NotificationNotFoundError
from fitpulse.infrastructure.models import NotificationModel
from fitpulse.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: str) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return None
        return self._to_entity(model)

    def list_for_user(
        self,
        user_id: str,
        *,
        page: int = 1,
        limit: int = 10,
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: str) -> int:
        count = (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.read.is_(False))
            .scalar()
        )
        return int(count or 0)

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            id=notification.id or uuid4().hex,
            user_id=notification.user_id,
            message=notification.message,
            type=notification.type,
            created_at=ensure_app_naive_datetime(
                notification.created_at or now_in_app_timezone()
            ),
            read=notification.read,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(
        self, notification_id: str, *, user_id: str | None = None
    ) -> Notification:
        """Flip the read flag of ``notification_id``.

        Marking an already read notification is accepted and leaves the record
        untouched. When ``user_id`` is given, records owned by someone else are
        reported as missing.
        """

        model = self.session.get(NotificationModel, notification_id)
        if model is None or (user_id is not None and model.user_id != user_id):
            raise NotificationNotFoundError(notification_id)
        if not model.read:
            model.read = True
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            message=model.message,
            type=model.type,
            created_at=ensure_app_timezone(model.created_at),
            read=bool(model.read),
        )


__all__ = ["NotificationRepository"]
