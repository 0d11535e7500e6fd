"""Websocket handlers for realtime notifications."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError

from fitpulse.domain.errors import ConnectionRejectedError
from fitpulse.infrastructure.notifications import (
    NotificationHub,
    NotificationHubs,
    RealtimeConnection,
)
from fitpulse.interfaces.api.dependencies import get_notification_hubs
from fitpulse.interfaces.api.schemas import ClientMessage

router = APIRouter(prefix="/notifications", tags=["notifications"])

logger = logging.getLogger(__name__)

PING_EVENT = "ping"
PONG_EVENT = "pong"
MARK_READ_EVENT = "markNotificationRead"
TYPING_EVENT = "typing"
ERROR_EVENT = "error"


@router.websocket("/{audience}/ws")
async def notifications_websocket(
    websocket: WebSocket,
    audience: str,
    hubs: NotificationHubs = Depends(get_notification_hubs),
) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    if audience not in hubs:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    hub = hubs.get(audience)
    connection = RealtimeConnection(websocket)
    try:
        await hub.gateway.authenticate(connection)
    except ConnectionRejectedError as exc:
        await _reject(connection, exc)
        return

    await websocket.accept()
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(frame.get("code", 1000), frame.get("reason"))

            message = _parse_message(_decode_frame(frame))
            if message is None:
                continue

            if not await _handle_message(hub, connection, message):
                return
    except WebSocketDisconnect:
        pass
    finally:
        hub.gateway.disconnect(connection)


async def _handle_message(
    hub: NotificationHub, connection: RealtimeConnection, message: ClientMessage
) -> bool:
    """Route one inbound frame; return ``False`` when the socket was closed."""

    if message.type == PING_EVENT:
        await connection.send_message({"type": PONG_EVENT})
        return True

    if message.type == hub.join_event:
        return await hub.gateway.join(connection, message.data)

    if message.type == MARK_READ_EVENT:
        notification_id = message.data_as_id()
        if notification_id is None:
            logger.debug("Ignoring %s without notification id", MARK_READ_EVENT)
            return True
        await hub.read_state.mark_read(connection, notification_id)
        return True

    if message.type != TYPING_EVENT:
        logger.debug(
            "Ignoring unknown event %r on connection %s", message.type, connection.id
        )
    return True


async def _reject(connection: RealtimeConnection, exc: ConnectionRejectedError) -> None:
    """Tell the client why it was refused, then close the socket."""

    await connection.websocket.accept()
    await connection.send_event(ERROR_EVENT, {"code": exc.code, "message": exc.message})
    await connection.close(code=status.WS_1008_POLICY_VIOLATION, reason=exc.message)


def _decode_frame(frame: dict[str, Any]) -> Any:
    text = frame.get("text")
    if text is None:
        logger.debug("Ignoring binary frame")
        return None
    try:
        return json.loads(text)
    except ValueError:
        logger.debug("Ignoring non JSON frame")
        return None


def _parse_message(raw: Any) -> ClientMessage | None:
    if not isinstance(raw, dict):
        return None
    try:
        return ClientMessage.model_validate(raw)
    except ValidationError:
        return None


__all__ = ["router"]
