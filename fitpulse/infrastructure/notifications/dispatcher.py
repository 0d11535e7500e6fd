"""Persist notifications and push them to the recipient's channel."""

from __future__ import annotations

import logging
from typing import Any

from fitpulse.domain.entities import Notification
from fitpulse.domain.messages import ERROR_MESSAGES
from fitpulse.domain.ports import NotificationStore

from .channels import LocalChannelBus
from .presence import PresenceRegistry
from .unread import UnreadCountPublisher

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"


class NotificationDispatcher:
    """Single write path for new notifications.

    Persistence happens first and its failures reach the caller. Realtime
    delivery is best effort: nobody listening, or a failed publish, never
    undoes the stored record.
    """

    def __init__(
        self,
        *,
        audience: str,
        store: NotificationStore,
        bus: LocalChannelBus,
        registry: PresenceRegistry,
        unread: UnreadCountPublisher,
    ) -> None:
        self.audience = audience
        self._store = store
        self._bus = bus
        self._registry = registry
        self._unread = unread

    async def dispatch(self, notification: Notification) -> Notification:
        """Store ``notification`` and broadcast it with the new unread count."""

        logger.debug(
            "[%s] Dispatching notification to user %s", self.audience, notification.user_id
        )
        saved = await self._store.create(notification)

        user_id = saved.user_id
        if not self._registry.is_online(user_id):
            logger.info(
                "[%s] %s: user %s has no local connection, notification %s stored only",
                self.audience,
                ERROR_MESSAGES["NOTIFICATIONS_NOT_FOUND"].code,
                user_id,
                saved.id,
            )

        await self._publish(user_id, NOTIFICATION_EVENT, serialize_notification(saved))
        try:
            await self._unread.broadcast(user_id)
        except Exception:
            logger.warning(
                "[%s] Could not broadcast unread count for user %s",
                self.audience,
                user_id,
                exc_info=True,
            )
        return saved

    async def _publish(self, channel: str, event: str, data: Any) -> None:
        try:
            await self._bus.publish(channel, event, data)
        except Exception:
            logger.warning(
                "[%s] Failed to publish %s to %s", self.audience, event, channel, exc_info=True
            )


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return notification.to_payload()


__all__ = ["NotificationDispatcher", "NOTIFICATION_EVENT", "serialize_notification"]
