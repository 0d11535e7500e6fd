"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from fitpulse.domain.errors import InvalidNotificationError

NOTIFICATION_TYPE_SUCCESS = "success"
NOTIFICATION_TYPE_ERROR = "error"
NOTIFICATION_TYPE_INFO = "info"

NOTIFICATION_TYPES = (
    NOTIFICATION_TYPE_SUCCESS,
    NOTIFICATION_TYPE_ERROR,
    NOTIFICATION_TYPE_INFO,
)


@dataclass(frozen=True)
class Notification:
    """Discrete event delivered to exactly one user.

    Records are immutable; the only state transition is the read flag going
    from ``False`` to ``True`` through :meth:`mark_read`.
    """

    user_id: str
    message: str
    type: str
    id: str | None = None
    created_at: datetime | None = None
    read: bool = False

    def __post_init__(self) -> None:
        if not self.user_id or not self.message or not self.type:
            raise InvalidNotificationError(
                "Missing required fields: user_id, message, or type"
            )
        if self.type not in NOTIFICATION_TYPES:
            raise InvalidNotificationError(
                f"Invalid notification type '{self.type}'"
            )

    def mark_read(self) -> "Notification":
        """Return the read version of this notification."""

        if self.read:
            return self
        return replace(self, read=True)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-serializable representation pushed to clients."""

        return {
            "id": self.id,
            "userId": self.user_id,
            "message": self.message,
            "type": self.type,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "read": self.read,
        }


__all__ = [
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_SUCCESS",
    "NOTIFICATION_TYPE_ERROR",
    "NOTIFICATION_TYPE_INFO",
]
