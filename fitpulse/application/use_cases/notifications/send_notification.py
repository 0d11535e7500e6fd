"""Create notifications and hand them to the realtime dispatcher."""

from __future__ import annotations

from fitpulse.domain.entities import (
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_SUCCESS,
    Notification,
)
from fitpulse.infrastructure.notifications import NotificationDispatcher
from fitpulse.utils import now_in_app_timezone


async def send_notification(
    dispatcher: NotificationDispatcher,
    *,
    user_id: str,
    message: str,
    type: str = NOTIFICATION_TYPE_INFO,
) -> Notification:
    """Persist a new notification for ``user_id`` and push it in realtime.

    Storage failures propagate to the caller; the notification then never
    existed.
    """

    notification = Notification(
        id=None,
        user_id=user_id,
        message=message,
        type=type,
        created_at=now_in_app_timezone(),
        read=False,
    )
    return await dispatcher.dispatch(notification)


async def notify_pt_plan_purchased(
    dispatcher: NotificationDispatcher, *, user_id: str, plan_title: str
) -> Notification:
    """Tell a member that the personal training plan purchase went through."""

    return await send_notification(
        dispatcher,
        user_id=user_id,
        message=f'Your purchase of "{plan_title}" PT plan is successful!',
        type=NOTIFICATION_TYPE_SUCCESS,
    )


__all__ = ["send_notification", "notify_pt_plan_purchased"]
