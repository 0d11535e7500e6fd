"""User facing message catalog shared by the realtime layer and use cases."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    message: str


ERROR_MESSAGES: dict[str, ErrorMessage] = {
    "AUTH_USER_NOT_AUTHENTICATED": ErrorMessage(
        "AUTH_USER_NOT_AUTHENTICATED", "User not authenticated"
    ),
    "AUTH_INVALID_ACCESS_TOKEN": ErrorMessage(
        "AUTH_INVALID_ACCESS_TOKEN", "Invalid access token"
    ),
    "NOTIFICATION_UNAUTHORIZED": ErrorMessage(
        "NOTIFICATION_UNAUTHORIZED", "Unauthorized access to notifications"
    ),
    "NOTIFICATION_MARK_READ_FAILED": ErrorMessage(
        "NOTIFICATION_MARK_READ_FAILED", "Failed to mark notification as read"
    ),
    "NOTIFICATIONS_NOT_FOUND": ErrorMessage(
        "NOTIFICATIONS_NOT_FOUND", "No notifications found"
    ),
}

MESSAGES: dict[str, str] = {
    "NOTIFICATION_MARKED_READ": "Notification marked as read",
}


__all__ = ["ErrorMessage", "ERROR_MESSAGES", "MESSAGES"]
