"""TokenProvider backed by flask-jwt-extended; needs an app context."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import flask_jwt_extended as fjwt
import jwt as pyjwt
from flask_jwt_extended.exceptions import JWTExtendedException

from vidshare.core.extensions import TokenIdentity
from vidshare.services._shared.errors import InvalidTokenError
from vidshare.services._shared.ports import TokenProvider


class JWTTokenProvider(TokenProvider):
    """
    Sign and verify JWTs with the application's flask-jwt-extended setup.

    Identities are wrapped in :class:`TokenIdentity`; the key loaders in
    :mod:`vidshare.core.extensions` read its ``token_type`` to pick the access
    or refresh secret.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        return fjwt.create_access_token(
            identity=TokenIdentity(user_id=str(identity), token_type="access"),
            additional_claims=additional_claims or {},
            expires_delta=expires_delta,
        )

    def create_refresh_token(self, *, identity: str, expires_delta: timedelta | None = None) -> str:
        return fjwt.create_refresh_token(
            identity=TokenIdentity(user_id=str(identity), token_type="refresh"),
            expires_delta=expires_delta,
        )

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify ``token`` and return its claims.

        :raises InvalidTokenError: Expired, tampered or otherwise unreadable.
        """
        try:
            return fjwt.decode_token(token)
        except pyjwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("Token has expired") from exc
        except (pyjwt.PyJWTError, JWTExtendedException) as exc:
            raise InvalidTokenError("Invalid token") from exc
