"""In-memory index of the connections each user keeps open."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import DefaultDict, Set

from .connection import RealtimeConnection

logger = logging.getLogger(__name__)


class PresenceRegistry:
    """Track which live connections belong to which user.

    Every user may hold several connections (tabs, devices). A reverse index
    keyed by connection id keeps disconnect handling independent from the
    number of online users. All mutations happen on the event loop thread.
    """

    def __init__(self) -> None:
        self._connections: DefaultDict[str, Set[RealtimeConnection]] = defaultdict(set)
        self._owners: dict[str, str] = {}

    def register(self, user_id: str, connection: RealtimeConnection) -> None:
        """Associate ``connection`` with ``user_id``."""

        previous = self._owners.get(connection.id)
        if previous is not None and previous != user_id:
            self._discard(previous, connection)

        self._connections[user_id].add(connection)
        self._owners[connection.id] = user_id
        logger.debug(
            "Registered connection %s for user %s (%d active)",
            connection.id,
            user_id,
            len(self._connections[user_id]),
        )

    def unregister(self, connection: RealtimeConnection) -> str | None:
        """Forget ``connection`` and return the user it belonged to."""

        user_id = self._owners.pop(connection.id, None)
        if user_id is None:
            return None
        self._discard(user_id, connection)
        logger.debug("Unregistered connection %s of user %s", connection.id, user_id)
        return user_id

    def is_online(self, user_id: str) -> bool:
        return bool(self._connections.get(user_id))

    def user_for(self, connection: RealtimeConnection) -> str | None:
        return self._owners.get(connection.id)

    def connections_for(self, user_id: str) -> frozenset[RealtimeConnection]:
        return frozenset(self._connections.get(user_id, ()))

    def clear(self) -> None:
        self._connections.clear()
        self._owners.clear()

    def __len__(self) -> int:
        return len(self._owners)

    def _discard(self, user_id: str, connection: RealtimeConnection) -> None:
        connections = self._connections.get(user_id)
        if connections is None:
            return
        connections.discard(connection)
        if not connections:
            self._connections.pop(user_id, None)


__all__ = ["PresenceRegistry"]
