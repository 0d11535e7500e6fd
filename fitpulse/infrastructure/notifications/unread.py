"""Compute and push the unread notification counter."""

from __future__ import annotations

import logging

from fitpulse.domain.ports import NotificationStore

from .channels import LocalChannelBus
from .connection import RealtimeConnection

logger = logging.getLogger(__name__)

UNREAD_COUNT_EVENT = "unreadCount"


class UnreadCountPublisher:
    """Recompute the unread counter from the store and emit it."""

    def __init__(self, store: NotificationStore, bus: LocalChannelBus) -> None:
        self._store = store
        self._bus = bus

    async def count(self, user_id: str) -> int:
        return await self._store.count_unread(user_id)

    async def send_to(self, connection: RealtimeConnection, user_id: str) -> int:
        """Push the counter to ``connection`` only."""

        count = await self.count(user_id)
        await connection.send_event(UNREAD_COUNT_EVENT, count)
        logger.debug("Sent unread count %d to connection %s", count, connection.id)
        return count

    async def broadcast(self, user_id: str) -> int:
        """Push the counter to every connection subscribed to ``user_id``."""

        count = await self.count(user_id)
        await self._bus.publish(user_id, UNREAD_COUNT_EVENT, count)
        logger.debug("Broadcast unread count %d for user %s", count, user_id)
        return count


__all__ = ["UnreadCountPublisher", "UNREAD_COUNT_EVENT"]
