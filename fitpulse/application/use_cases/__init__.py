"""Aggregate application use cases."""

from .notifications import (
    list_notifications,
    mark_notification_read,
    notify_pt_plan_purchased,
    send_notification,
)

__all__ = [
    "send_notification",
    "notify_pt_plan_purchased",
    "list_notifications",
    "mark_notification_read",
]
