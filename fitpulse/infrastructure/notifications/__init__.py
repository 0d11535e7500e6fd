"""Realtime notification helpers for the infrastructure layer."""

from .channels import LocalChannelBus, build_message
from .connection import RealtimeConnection
from .dispatcher import NOTIFICATION_EVENT, NotificationDispatcher, serialize_notification
from .gateway import ConnectionGateway
from .hub import (
    AUDIENCE_TRAINER,
    AUDIENCE_USER,
    JOIN_EVENTS,
    NotificationHub,
    NotificationHubs,
    build_notification_hubs,
)
from .presence import PresenceRegistry
from .read_state import NOTIFICATION_READ_EVENT, ReadStateSynchronizer
from .redis_bus import RedisChannelBus
from .unread import UNREAD_COUNT_EVENT, UnreadCountPublisher

__all__ = [
    "LocalChannelBus",
    "RedisChannelBus",
    "build_message",
    "RealtimeConnection",
    "PresenceRegistry",
    "ConnectionGateway",
    "NotificationDispatcher",
    "ReadStateSynchronizer",
    "UnreadCountPublisher",
    "NotificationHub",
    "NotificationHubs",
    "build_notification_hubs",
    "serialize_notification",
    "AUDIENCE_USER",
    "AUDIENCE_TRAINER",
    "JOIN_EVENTS",
    "NOTIFICATION_EVENT",
    "NOTIFICATION_READ_EVENT",
    "UNREAD_COUNT_EVENT",
]
