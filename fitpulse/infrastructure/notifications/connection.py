"""Session handle wrapping a realtime websocket."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from fastapi import WebSocket, status
from starlette.websockets import WebSocketState

from fitpulse.domain.entities import Principal


class RealtimeConnection:
    """One live websocket session and the principal it authenticated as."""

    def __init__(self, websocket: WebSocket, *, connection_id: str | None = None) -> None:
        self.id = connection_id or uuid4().hex
        self.websocket = websocket
        self._principal: Principal | None = None

    @property
    def principal(self) -> Principal | None:
        return self._principal

    @property
    def user_id(self) -> str | None:
        return self._principal.id if self._principal else None

    def attach_principal(self, principal: Principal) -> None:
        """Bind the verified identity; it cannot change afterwards."""

        if self._principal is not None and self._principal != principal:
            raise RuntimeError("Connection is already bound to another principal")
        self._principal = principal

    def cookie(self, name: str) -> str | None:
        return self.websocket.cookies.get(name)

    async def send_event(self, event: str, data: Any = None) -> None:
        await self.send_message({"type": event, "data": data})

    async def send_message(self, message: dict[str, Any]) -> None:
        await self.websocket.send_json(message)

    async def close(
        self, code: int = status.WS_1008_POLICY_VIOLATION, reason: str | None = None
    ) -> None:
        if self.websocket.application_state == WebSocketState.DISCONNECTED:
            return
        await self.websocket.close(code=code, reason=reason)

    def __repr__(self) -> str:
        return f"RealtimeConnection(id={self.id!r}, user_id={self.user_id!r})"


__all__ = ["RealtimeConnection"]
