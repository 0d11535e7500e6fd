"""Pydantic models describing realtime notification frames."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ClientMessage(BaseModel):
    """Frame sent by a client over the notifications websocket."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field(..., min_length=1, description="Event name")
    data: Any = None

    def data_as_id(self) -> str | None:
        """Return ``data`` as an identifier string when it looks like one."""

        if isinstance(self.data, bool) or self.data is None:
            return None
        if isinstance(self.data, (str, int)):
            value = str(self.data).strip()
            return value or None
        return None


__all__ = ["ClientMessage"]
