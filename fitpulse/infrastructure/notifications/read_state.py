"""Keep read flags and unread counters in sync across a user's sessions."""

from __future__ import annotations

import logging

from fitpulse.domain.messages import ERROR_MESSAGES, MESSAGES
from fitpulse.domain.ports import NotificationStore

from .channels import LocalChannelBus
from .connection import RealtimeConnection
from .presence import PresenceRegistry
from .unread import UnreadCountPublisher

logger = logging.getLogger(__name__)

NOTIFICATION_READ_EVENT = "notificationRead"


class ReadStateSynchronizer:
    """Handle "mark as read" requests coming from clients."""

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

    async def mark_read(self, connection: RealtimeConnection, notification_id: str) -> None:
        """Mark ``notification_id`` read on behalf of ``connection``.

        Store failures are logged and dropped; the client gets no error frame.
        """

        try:
            await self._store.mark_as_read(notification_id, user_id=connection.user_id)
        except Exception:
            logger.exception(
                "[%s] %s (id=%s, connection=%s)",
                self.audience,
                ERROR_MESSAGES["NOTIFICATION_MARK_READ_FAILED"].message,
                notification_id,
                connection.id,
            )
            return

        user_id = self._registry.user_for(connection)
        if user_id is None:
            logger.warning(
                "[%s] Connection %s marked %s read but is not in any room",
                self.audience,
                connection.id,
                notification_id,
            )
            return

        await self._broadcast_read_state(user_id, notification_id)

    async def mark_read_for_user(self, user_id: str, notification_id: str) -> bool:
        """Mark ``notification_id`` read for ``user_id`` and report the outcome."""

        try:
            await self._store.mark_as_read(notification_id, user_id=user_id)
        except Exception:
            logger.exception(
                "[%s] %s (id=%s, user=%s)",
                self.audience,
                ERROR_MESSAGES["NOTIFICATION_MARK_READ_FAILED"].message,
                notification_id,
                user_id,
            )
            return False

        await self._broadcast_read_state(user_id, notification_id)
        return True

    async def _broadcast_read_state(self, user_id: str, notification_id: str) -> None:
        try:
            await self._bus.publish(
                user_id, NOTIFICATION_READ_EVENT, {"notificationId": notification_id}
            )
            await self._unread.broadcast(user_id)
        except Exception:
            logger.exception(
                "[%s] Could not broadcast read state for user %s", self.audience, user_id
            )
            return
        logger.info(
            "[%s] %s (id=%s, user=%s)",
            self.audience,
            MESSAGES["NOTIFICATION_MARKED_READ"],
            notification_id,
            user_id,
        )


__all__ = ["ReadStateSynchronizer", "NOTIFICATION_READ_EVENT"]
