"""Exceptions raised by the realtime notification core."""

from __future__ import annotations


class FitPulseError(Exception):
    """Base class for every error raised by the package."""


class InvalidNotificationError(FitPulseError, ValueError):
    """Raised when a notification is built with missing or invalid fields."""


class InvalidCredentialError(FitPulseError):
    """Raised by credential verifiers when a bearer token cannot be trusted."""


class NotificationNotFoundError(FitPulseError):
    """Raised when a notification does not exist for the requesting user."""

    def __init__(self, notification_id: str) -> None:
        super().__init__(f"Notification with id {notification_id} not found")
        self.notification_id = notification_id


class ConnectionRejectedError(FitPulseError):
    """Raised when a realtime connection must not be admitted."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


__all__ = [
    "FitPulseError",
    "InvalidNotificationError",
    "InvalidCredentialError",
    "NotificationNotFoundError",
    "ConnectionRejectedError",
]
