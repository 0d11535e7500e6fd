"""Acknowledged "mark as read" for callers outside the websocket."""

from __future__ import annotations

from dataclasses import dataclass

from fitpulse.domain.messages import ERROR_MESSAGES, MESSAGES
from fitpulse.infrastructure.notifications import NotificationHub


@dataclass(frozen=True)
class MarkNotificationReadResult:
    success: bool
    message: str
    code: str | None = None


async def mark_notification_read(
    hub: NotificationHub, *, user_id: str | None, notification_id: str
) -> MarkNotificationReadResult:
    """Mark ``notification_id`` read and sync every open session of the user."""

    if not user_id:
        error = ERROR_MESSAGES["NOTIFICATION_UNAUTHORIZED"]
        return MarkNotificationReadResult(False, error.message, error.code)

    if not await hub.read_state.mark_read_for_user(user_id, notification_id):
        error = ERROR_MESSAGES["NOTIFICATION_MARK_READ_FAILED"]
        return MarkNotificationReadResult(False, error.message, error.code)

    return MarkNotificationReadResult(True, MESSAGES["NOTIFICATION_MARKED_READ"])


__all__ = ["MarkNotificationReadResult", "mark_notification_read"]
