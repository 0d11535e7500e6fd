"""Domain entities exposed by the application."""

from .notification import (
    NOTIFICATION_TYPE_ERROR,
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_SUCCESS,
    NOTIFICATION_TYPES,
    Notification,
)
from .principal import Principal

__all__ = [
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_SUCCESS",
    "NOTIFICATION_TYPE_ERROR",
    "NOTIFICATION_TYPE_INFO",
    "Principal",
]
