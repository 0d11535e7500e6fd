"""Security helpers for access token handling."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from jose import JWTError, jwt

from fitpulse.config import Settings, get_settings
from fitpulse.domain.entities import Principal
from fitpulse.domain.errors import InvalidCredentialError

ACCESS_TOKEN_TTL = timedelta(minutes=15)


def create_access_token(
    data: dict,
    expires_delta: timedelta | None = None,
    *,
    settings: Settings | None = None,
) -> str:
    settings = settings or get_settings()
    expire = datetime.now(timezone.utc) + (expires_delta or ACCESS_TOKEN_TTL)
    claims = {"jti": uuid4().hex, **data, "exp": expire}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, *, settings: Settings | None = None) -> dict:
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


class JwtCredentialVerifier:
    """Verify access tokens signed with the application secret.

    The subject identity is read from the ``id`` claim issued by the
    marketplace login flow.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    async def verify(self, token: str) -> Principal:
        try:
            payload = decode_access_token(token, settings=self._settings)
        except ValueError as exc:
            raise InvalidCredentialError(str(exc)) from exc

        subject = payload.get("id")
        if subject is None or isinstance(subject, bool) or str(subject).strip() == "":
            raise InvalidCredentialError("Access token does not carry a subject id")

        email = payload.get("email")
        token_id = payload.get("jti")
        return Principal(
            id=str(subject),
            email=email if isinstance(email, str) else None,
            token_id=token_id if isinstance(token_id, str) else None,
        )


__all__ = [
    "ACCESS_TOKEN_TTL",
    "create_access_token",
    "decode_access_token",
    "JwtCredentialVerifier",
]
