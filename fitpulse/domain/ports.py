"""Ports describing the collaborators consumed by the realtime core."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from fitpulse.domain.entities import Notification, Principal


class NotificationStore(Protocol):
    """Asynchronous persistence boundary for notification records."""

    async def create(self, notification: Notification) -> Notification:
        """Persist ``notification`` and return the stored form with its id."""

    async def count_unread(self, user_id: str) -> int:
        """Return how many notifications of ``user_id`` are still unread."""

    async def mark_as_read(
        self, notification_id: str, *, user_id: str | None = None
    ) -> Notification:
        """Flip the read flag; marking an already read record is a no-op."""

    async def list_for_user(
        self, user_id: str, *, page: int = 1, limit: int = 10
    ) -> Sequence[Notification]:
        """Return a page of notifications for ``user_id``, newest first."""


class CredentialVerifier(Protocol):
    """Turn an opaque bearer credential into a :class:`Principal`."""

    async def verify(self, token: str) -> Principal:
        """Return the principal or raise ``InvalidCredentialError``."""


__all__ = ["NotificationStore", "CredentialVerifier"]
