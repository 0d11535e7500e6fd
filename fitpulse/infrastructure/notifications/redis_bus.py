"""Redis pub/sub backed channel bus for multi-process deployments."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import Any

import redis.asyncio as redis

from .channels import LocalChannelBus, build_message

logger = logging.getLogger(__name__)


class RedisChannelBus(LocalChannelBus):
    """Fan out channel messages through Redis so every process sees them.

    ``publish`` only writes to Redis; local delivery happens when the
    listener receives the message back, which keeps a single delivery path
    whether the recipient is connected to this process or another one.
    """

    def __init__(
        self,
        redis_url: str | None = None,
        *,
        namespace: str,
        prefix: str = "fitpulse:notifications:",
        client: Any | None = None,
        reconnect_delay: float = 0.5,
        max_reconnect_delay: float = 30.0,
    ) -> None:
        super().__init__()
        if client is None and not redis_url:
            raise ValueError("A Redis URL or client is required")
        self._redis_url = redis_url
        self._client = client
        self._owns_client = client is None
        self._channel_prefix = f"{prefix}{namespace}:"
        self._pubsub: Any | None = None
        self._listener: asyncio.Task[None] | None = None
        self._reconnect_delay = reconnect_delay
        self._max_reconnect_delay = max_reconnect_delay

    @property
    def channel_prefix(self) -> str:
        return self._channel_prefix

    async def start(self) -> None:
        if self._client is None:
            self._client = redis.from_url(self._redis_url, decode_responses=True)
        self._pubsub = self._client.pubsub()
        await self._pubsub.psubscribe(self._pattern)
        self._listener = asyncio.create_task(self._listen())
        logger.info("Listening for realtime events on %s*", self._channel_prefix)

    async def stop(self) -> None:
        if self._listener is not None:
            self._listener.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._listener
            self._listener = None
        if self._pubsub is not None:
            await self._pubsub.punsubscribe()
            await self._pubsub.aclose()
            self._pubsub = None
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
        await super().stop()

    async def publish(self, channel: str, event: str, data: Any) -> None:
        if self._client is None:
            raise RuntimeError("Redis channel bus has not been started")
        payload = json.dumps(build_message(event, data), default=str)
        receivers = await self._client.publish(f"{self._channel_prefix}{channel}", payload)
        logger.debug("Published %s to %s (%s receivers)", event, channel, receivers)

    async def handle_message(self, item: dict[str, Any]) -> None:
        """Deliver one raw pub/sub item to local subscribers."""

        if item.get("type") not in {"message", "pmessage"}:
            return

        raw_channel = _as_text(item.get("channel"))
        if not raw_channel.startswith(self._channel_prefix):
            return
        channel = raw_channel[len(self._channel_prefix) :]

        try:
            message = json.loads(_as_text(item.get("data")))
        except ValueError:
            logger.warning("Ignoring undecodable realtime message on %s", raw_channel)
            return
        if not isinstance(message, dict):
            return

        await self.deliver(channel, message)

    @property
    def _pattern(self) -> str:
        return f"{self._channel_prefix}*"

    async def _listen(self) -> None:
        """Feed pub/sub messages to ``deliver``, resubscribing after failures."""

        delay = self._reconnect_delay
        while True:
            try:
                async for item in self._pubsub.listen():
                    delay = self._reconnect_delay
                    try:
                        await self.handle_message(item)
                    except Exception:
                        logger.exception("Failed to deliver realtime message")
                logger.warning("Redis subscription on %s ended", self._pattern)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception(
                    "Redis listener on %s failed; retrying in %.1fs", self._pattern, delay
                )

            await asyncio.sleep(delay)
            delay = min(delay * 2, self._max_reconnect_delay)
            try:
                await self._pubsub.psubscribe(self._pattern)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.error("Could not resubscribe to %s", self._pattern, exc_info=True)


def _as_text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return "" if value is None else str(value)


__all__ = ["RedisChannelBus"]
