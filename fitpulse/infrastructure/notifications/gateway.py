"""Admission and room authorization for realtime connections."""

from __future__ import annotations

import logging

from fastapi import status

from fitpulse.domain.entities import Principal
from fitpulse.domain.errors import ConnectionRejectedError, InvalidCredentialError
from fitpulse.domain.messages import ERROR_MESSAGES
from fitpulse.domain.ports import CredentialVerifier

from .channels import LocalChannelBus
from .connection import RealtimeConnection
from .presence import PresenceRegistry
from .unread import UnreadCountPublisher

logger = logging.getLogger(__name__)


class ConnectionGateway:
    """Authenticate connections and let them join their own room only."""

    def __init__(
        self,
        *,
        audience: str,
        cookie_name: str,
        verifier: CredentialVerifier,
        registry: PresenceRegistry,
        bus: LocalChannelBus,
        unread: UnreadCountPublisher,
    ) -> None:
        self.audience = audience
        self.cookie_name = cookie_name
        self._verifier = verifier
        self._registry = registry
        self._bus = bus
        self._unread = unread

    async def authenticate(self, connection: RealtimeConnection) -> Principal:
        """Verify the handshake credential and bind it to ``connection``."""

        token = connection.cookie(self.cookie_name)
        if not token:
            error = ERROR_MESSAGES["AUTH_USER_NOT_AUTHENTICATED"]
            logger.warning(
                "[%s] %s (connection=%s)", self.audience, error.message, connection.id
            )
            raise ConnectionRejectedError(error.code, error.message)

        error = ERROR_MESSAGES["AUTH_INVALID_ACCESS_TOKEN"]
        try:
            principal = await self._verifier.verify(token)
        except InvalidCredentialError as exc:
            logger.warning(
                "[%s] %s (connection=%s): %s",
                self.audience,
                error.message,
                connection.id,
                exc,
            )
            raise ConnectionRejectedError(error.code, error.message) from exc
        except Exception as exc:
            logger.exception(
                "[%s] Token verification failed for connection %s",
                self.audience,
                connection.id,
            )
            raise ConnectionRejectedError(error.code, error.message) from exc

        if principal is None or not principal.id:
            logger.warning(
                "[%s] %s (connection=%s): missing subject",
                self.audience,
                error.message,
                connection.id,
            )
            raise ConnectionRejectedError(error.code, error.message)

        connection.attach_principal(principal)
        logger.info(
            "[%s] Authenticated user %s on connection %s",
            self.audience,
            principal.id,
            connection.id,
        )
        return principal

    async def join(self, connection: RealtimeConnection, requested_user_id: object) -> bool:
        """Subscribe ``connection`` to the room of ``requested_user_id``.

        Only the identity established at authentication may be joined; any
        other request closes the connection.
        """

        user_id = connection.user_id
        if user_id is None or str(requested_user_id) != user_id:
            error = ERROR_MESSAGES["NOTIFICATION_UNAUTHORIZED"]
            logger.warning(
                "[%s] %s: connection %s authenticated as %s asked for %s",
                self.audience,
                error.message,
                connection.id,
                user_id,
                requested_user_id,
            )
            await connection.close(
                code=status.WS_1008_POLICY_VIOLATION, reason=error.code
            )
            return False

        self._registry.register(user_id, connection)
        self._bus.subscribe(user_id, connection)
        logger.info(
            "[%s] User %s joined with connection %s (%d in room)",
            self.audience,
            user_id,
            connection.id,
            self._bus.subscriber_count(user_id),
        )
        try:
            await self._unread.send_to(connection, user_id)
        except Exception:
            logger.exception(
                "[%s] Could not send unread count to user %s", self.audience, user_id
            )
        return True

    def disconnect(self, connection: RealtimeConnection) -> str | None:
        """Drop every trace of ``connection`` from presence and channels."""

        self._bus.unsubscribe_all(connection)
        user_id = self._registry.unregister(connection)
        if user_id is not None:
            logger.info(
                "[%s] Connection %s of user %s disconnected (%d still open)",
                self.audience,
                connection.id,
                user_id,
                len(self._registry.connections_for(user_id)),
            )
        return user_id


__all__ = ["ConnectionGateway"]
