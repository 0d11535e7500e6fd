"""Domain entity describing an authenticated realtime client."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """Identity established by the credential verifier."""

    id: str
    email: str | None = None
    token_id: str | None = None


__all__ = ["Principal"]
