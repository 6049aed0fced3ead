"""Token signing port and an in-memory double for tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

from vidshare.services._shared.errors import InvalidTokenError


class TokenProvider(Protocol):
    """Port for issuing and decoding signed tokens.

    ``decode`` MUST raise :class:`InvalidTokenError` for any verification
    failure (expired, bad signature, malformed) and return the claims with
    at least ``sub``, ``type`` and ``exp`` otherwise.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def create_refresh_token(
        self,
        *,
        identity: str,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...


class StubTokenProvider(TokenProvider):
    """In-memory tokens for unit tests.

    Tokens are readable strings such as ``refresh.<user id>.3``. Expiry is
    checked against the wall clock when decoding, so freezegun can age them.
    """

    DEFAULT_TTL = {"access": timedelta(minutes=15), "refresh": timedelta(days=7)}

    def __init__(self) -> None:
        self._claims: dict[str, dict[str, Any]] = {}

    def _issue(self, kind: str, identity: str, ttl: timedelta | None, extra: dict | None) -> str:
        serial = len(self._claims) + 1
        token = f"{kind}.{identity}.{serial}"
        expires = datetime.now(tz=UTC) + (ttl or self.DEFAULT_TTL[kind])
        self._claims[token] = {
            **(extra or {}),
            "sub": identity,
            "type": kind,
            "jti": f"stub-{serial}",
            "exp": int(expires.timestamp()),
        }
        return token

    def create_access_token(self, *, identity, additional_claims=None, expires_delta=None) -> str:
        return self._issue("access", identity, expires_delta, additional_claims)

    def create_refresh_token(self, *, identity, expires_delta=None) -> str:
        return self._issue("refresh", identity, expires_delta, None)

    def decode(self, token: str) -> dict[str, Any]:
        claims = self._claims.get(token)
        if claims is None:
            raise InvalidTokenError("Invalid token")
        if claims["exp"] <= datetime.now(tz=UTC).timestamp():
            raise InvalidTokenError("Token has expired")
        return dict(claims)
