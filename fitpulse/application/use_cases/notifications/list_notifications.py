"""Paginated notification history."""

from __future__ import annotations

from collections.abc import Sequence

from fitpulse.domain.entities import Notification
from fitpulse.domain.ports import NotificationStore

MAX_PAGE_SIZE = 100


async def list_notifications(
    store: NotificationStore,
    *,
    user_id: str,
    page: int = 1,
    limit: int = 10,
) -> Sequence[Notification]:
    """Return one page of ``user_id`` notifications, newest first."""

    if not user_id:
        raise ValueError("user_id is required")
    if page < 1:
        raise ValueError("page must be greater than or equal to 1")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}")

    return await store.list_for_user(user_id, page=page, limit=limit)


__all__ = ["list_notifications", "MAX_PAGE_SIZE"]
