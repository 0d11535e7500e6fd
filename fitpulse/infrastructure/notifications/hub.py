"""Composition of the realtime components for one audience."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from fitpulse.config import Settings
from fitpulse.domain.ports import CredentialVerifier, NotificationStore

from .channels import LocalChannelBus
from .dispatcher import NotificationDispatcher
from .gateway import ConnectionGateway
from .presence import PresenceRegistry
from .read_state import ReadStateSynchronizer
from .redis_bus import RedisChannelBus
from .unread import UnreadCountPublisher

logger = logging.getLogger(__name__)

AUDIENCE_USER = "user"
AUDIENCE_TRAINER = "trainer"

JOIN_EVENTS = {
    AUDIENCE_USER: "join",
    AUDIENCE_TRAINER: "joinTrainer",
}


class NotificationHub:
    """Own the presence state, channels and handlers of one audience."""

    def __init__(
        self,
        *,
        audience: str,
        store: NotificationStore,
        verifier: CredentialVerifier,
        cookie_name: str,
        join_event: str = "join",
        bus: LocalChannelBus | None = None,
    ) -> None:
        self.audience = audience
        self.join_event = join_event
        self.store = store
        self.registry = PresenceRegistry()
        self.bus = bus or LocalChannelBus()
        self.unread = UnreadCountPublisher(store, self.bus)
        self.gateway = ConnectionGateway(
            audience=audience,
            cookie_name=cookie_name,
            verifier=verifier,
            registry=self.registry,
            bus=self.bus,
            unread=self.unread,
        )
        self.dispatcher = NotificationDispatcher(
            audience=audience,
            store=store,
            bus=self.bus,
            registry=self.registry,
            unread=self.unread,
        )
        self.read_state = ReadStateSynchronizer(
            audience=audience,
            store=store,
            bus=self.bus,
            registry=self.registry,
            unread=self.unread,
        )

    async def start(self) -> None:
        await self.bus.start()
        logger.info("Notification hub '%s' started", self.audience)

    async def stop(self) -> None:
        await self.bus.stop()
        self.registry.clear()
        logger.info("Notification hub '%s' stopped", self.audience)


class NotificationHubs:
    """Audience name to :class:`NotificationHub` mapping."""

    def __init__(self, hubs: dict[str, NotificationHub]) -> None:
        self._hubs = dict(hubs)

    def get(self, audience: str) -> NotificationHub:
        try:
            return self._hubs[audience]
        except KeyError as exc:
            raise LookupError(f"Unknown notification audience '{audience}'") from exc

    def __contains__(self, audience: object) -> bool:
        return audience in self._hubs

    def __iter__(self) -> Iterator[NotificationHub]:
        return iter(self._hubs.values())

    async def start(self) -> None:
        for hub in self:
            await hub.start()

    async def stop(self) -> None:
        for hub in self:
            await hub.stop()


def build_notification_hubs(
    settings: Settings,
    *,
    store: NotificationStore,
    verifier: CredentialVerifier,
) -> NotificationHubs:
    """Create one hub per audience using the configured cookies and bus."""

    cookies = {
        AUDIENCE_USER: settings.user_access_cookie,
        AUDIENCE_TRAINER: settings.trainer_access_cookie,
    }
    hubs: dict[str, NotificationHub] = {}
    for audience, cookie_name in cookies.items():
        bus: LocalChannelBus
        if settings.redis_url:
            bus = RedisChannelBus(
                settings.redis_url,
                namespace=audience,
                prefix=settings.redis_channel_prefix,
            )
        else:
            bus = LocalChannelBus()
        hubs[audience] = NotificationHub(
            audience=audience,
            store=store,
            verifier=verifier,
            cookie_name=cookie_name,
            join_event=JOIN_EVENTS[audience],
            bus=bus,
        )
    return NotificationHubs(hubs)


__all__ = [
    "AUDIENCE_USER",
    "AUDIENCE_TRAINER",
    "JOIN_EVENTS",
    "NotificationHub",
    "NotificationHubs",
    "build_notification_hubs",
]
