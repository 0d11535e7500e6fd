"""Public helpers for emitting and managing notifications."""

from .list_notifications import MAX_PAGE_SIZE, list_notifications
from .mark_notification_read import MarkNotificationReadResult, mark_notification_read
from .send_notification import notify_pt_plan_purchased, send_notification

__all__ = [
    "send_notification",
    "notify_pt_plan_purchased",
    "list_notifications",
    "MAX_PAGE_SIZE",
    "mark_notification_read",
    "MarkNotificationReadResult",
]
