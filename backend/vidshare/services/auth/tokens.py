"""
Token service: issue and verify access/refresh tokens.

Access tokens carry identity claims for the client; refresh tokens carry
only the subject. Both go through a :class:`TokenProvider`, so the service
never sees signing keys.
"""

from __future__ import annotations

from typing import Any

from vidshare.models.user import User
from vidshare.services._shared.errors import InvalidTokenError
from vidshare.services._shared.ports.token_provider import TokenProvider
from vidshare.services.auth.dto import AuthTokenConfig, TokenPairOut

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenService:
    """Issue, verify and pair tokens for a user."""

    def __init__(self, provider: TokenProvider, cfg: AuthTokenConfig | None = None) -> None:
        self.provider = provider
        self.cfg = cfg or AuthTokenConfig()

    def issue_access_token(self, user: User) -> str:
        """Mint an access token with ``sub`` plus email, username and fullName."""
        claims: dict[str, Any] = {
            "email": user.email,
            "username": user.username,
            "fullName": user.full_name,
        }
        return self.provider.create_access_token(
            identity=user.id,
            additional_claims=claims,
            expires_delta=self.cfg.access_expires,
        )

    def issue_refresh_token(self, user: User) -> str:
        """Mint a refresh token carrying only the subject."""
        return self.provider.create_refresh_token(
            identity=user.id,
            expires_delta=self.cfg.refresh_expires,
        )

    def issue_pair(self, user: User) -> TokenPairOut:
        return TokenPairOut(
            access_token=self.issue_access_token(user),
            refresh_token=self.issue_refresh_token(user),
        )

    def verify(self, token: str | None, token_type: str = ACCESS_TOKEN_TYPE) -> dict[str, Any]:
        """
        Decode ``token`` and check it is of ``token_type``.

        :param token: Encoded token.
        :type token: str | None
        :param token_type: Expected ``type`` claim.
        :type token_type: str
        :returns: Verified claims.
        :rtype: dict[str, Any]
        :raises InvalidTokenError: If the token is missing, fails verification,
            has the wrong type or no subject.
        """
        if not token:
            raise InvalidTokenError("Token is missing")
        claims = self.provider.decode(token)
        if claims.get("type") != token_type:
            raise InvalidTokenError(f"Expected a {token_type} token")
        if not claims.get("sub"):
            raise InvalidTokenError("Token has no subject")
        return claims
