"""Per-user broadcast channels for realtime events."""

from __future__ import annotations

import copy
import logging
from collections import defaultdict
from typing import Any, DefaultDict, Set

from .connection import RealtimeConnection

logger = logging.getLogger(__name__)


class LocalChannelBus:
    """Deliver channel messages to the connections of this process."""

    def __init__(self) -> None:
        self._subscribers: DefaultDict[str, Set[RealtimeConnection]] = defaultdict(set)
        self._channels_by_connection: DefaultDict[str, Set[str]] = defaultdict(set)

    async def start(self) -> None:
        """Nothing to prepare for in-process delivery."""

    async def stop(self) -> None:
        self._subscribers.clear()
        self._channels_by_connection.clear()

    def subscribe(self, channel: str, connection: RealtimeConnection) -> None:
        self._subscribers[channel].add(connection)
        self._channels_by_connection[connection.id].add(channel)

    def unsubscribe(self, channel: str, connection: RealtimeConnection) -> None:
        subscribers = self._subscribers.get(channel)
        if subscribers is not None:
            subscribers.discard(connection)
            if not subscribers:
                self._subscribers.pop(channel, None)

        channels = self._channels_by_connection.get(connection.id)
        if channels is not None:
            channels.discard(channel)
            if not channels:
                self._channels_by_connection.pop(connection.id, None)

    def unsubscribe_all(self, connection: RealtimeConnection) -> None:
        for channel in list(self._channels_by_connection.get(connection.id, ())):
            self.unsubscribe(channel, connection)

    def subscriber_count(self, channel: str) -> int:
        return len(self._subscribers.get(channel, ()))

    async def publish(self, channel: str, event: str, data: Any) -> None:
        """Send ``event`` to every subscriber of ``channel``."""

        await self.deliver(channel, build_message(event, data))

    async def deliver(self, channel: str, message: dict[str, Any]) -> int:
        """Write ``message`` to local subscribers and return how many got it."""

        delivered = 0
        for connection in list(self._subscribers.get(channel, ())):
            try:
                await connection.send_message(message)
            except Exception:
                logger.warning(
                    "Dropping connection %s from channel %s after a failed send",
                    connection.id,
                    channel,
                    exc_info=True,
                )
                self.unsubscribe(channel, connection)
            else:
                delivered += 1
        return delivered


def build_message(event: str, data: Any) -> dict[str, Any]:
    """Return the wire envelope used for every outbound event."""

    return {"type": event, "data": copy.deepcopy(data)}


__all__ = ["LocalChannelBus", "build_message"]
