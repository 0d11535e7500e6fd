"""SQLAlchemy model for persisted notifications."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, Index, String, Text

from fitpulse.infrastructure.database import Base
from fitpulse.utils import ensure_app_naive_datetime, now_in_app_timezone


def _generate_id() -> str:
    return uuid4().hex


def _now_naive():
    return ensure_app_naive_datetime(now_in_app_timezone())


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (Index("ix_notification_user_id_read", "user_id", "read"),)

    id = Column(String(32), primary_key=True, default=_generate_id)
    user_id = Column(String(64), nullable=False, index=True)
    message = Column(Text, nullable=False)
    type = Column(String(20), nullable=False)
    created_at = Column(DateTime(), nullable=False, default=_now_naive)
    read = Column(Boolean, nullable=False, default=False)


__all__ = ["NotificationModel"]
