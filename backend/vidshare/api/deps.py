"""Shared API helpers: auth gate, request context, envelopes and cookies."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException, NoAuthorizationError
from jwt import PyJWTError

from vidshare.core.errors import Unauthorized
from vidshare.core.extensions import get_media_uploader
from vidshare.core.logger import ensure_request_id
from vidshare.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from vidshare.schemas.common import PaginationQuerySchema
from vidshare.services._shared.base import ServiceContext
from vidshare.services._shared.converters import to_user_out
from vidshare.services._shared.dto import UserOut
from vidshare.services.auth.dto import AuthTokenConfig, TokenPairOut
from vidshare.services.auth.tokens import TokenService
from vidshare.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork

F = TypeVar("F", bound=Callable[..., Any])


# ------------------------------ Envelopes ------------------------------------


def success_envelope(status: int, data: Any, message: str = "Success") -> dict[str, Any]:
    """Build the success body ``{statusCode, data, message, success}``."""

    return {
        "statusCode": status,
        "data": data,
        "message": message,
        "success": status < 400,
    }


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def respond(data: Any, message: str = "Success", *, status: int = 200) -> Response:
    """Shortcut for handlers that do not need the request context."""

    return json_response(success_envelope(status, data, message), status=status)


# --------------------------- Request context ---------------------------------


@dataclass(slots=True)
class RequestContext:
    """
    Per-request data handed to handlers once the auth gate passes.

    :param user: Authenticated caller (public fields only), or ``None``.
    :param request_id: Correlation id echoed in ``X-Request-ID``.
    :param params: Route parameters of the matched endpoint.
    """

    user: UserOut | None
    request_id: str
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def user_id(self) -> str | None:
        return self.user.id if self.user is not None else None

    def service_context(self) -> ServiceContext:
        return ServiceContext(actor_id=self.user_id, request_id=self.request_id)

    def respond(self, data: Any, message: str = "Success", *, status: int = 200) -> Response:
        """Wrap ``data`` in the success envelope."""

        return respond(data, message, status=status)


def current_context() -> RequestContext:
    """Return the context attached by :func:`require_auth` (anonymous otherwise)."""

    ctx = getattr(g, "request_context", None)
    if ctx is None:
        ctx = RequestContext(
            user=None,
            request_id=ensure_request_id(),
            params=dict(request.view_args or {}),
        )
        g.request_context = ctx
    return ctx


def service_context() -> ServiceContext:
    return current_context().service_context()


def _load_caller(user_id: str) -> UserOut | None:
    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        user = uow.users.get_public(user_id)
        return to_user_out(user) if user is not None else None


def require_auth(func: F) -> F:
    """
    Ensure the request carries a valid access token for an existing user.

    The token is read from the ``accessToken`` cookie, then from the
    ``Authorization: Bearer`` header. Every verification failure collapses
    into a single 401.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            verify_jwt_in_request(optional=False)
        except NoAuthorizationError as exc:
            raise Unauthorized("Unauthorized request") from exc
        except (JWTExtendedException, PyJWTError) as exc:
            raise Unauthorized("Invalid access token") from exc

        user = _load_caller(str(get_jwt_identity()))
        if user is None:
            raise Unauthorized("Invalid access token")
        g.request_context = RequestContext(
            user=user,
            request_id=ensure_request_id(),
            params=dict(kwargs),
        )
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# ----------------------------- Parsing helpers -------------------------------


def parse_pagination(default_limit: int = 10, max_limit: int = 100) -> dict[str, int]:
    """Parse ``page``/``limit`` from ``request.args`` using Marshmallow."""

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load(request.args)
    return {"page": data["page"], "limit": data["limit"]}


def request_payload() -> dict[str, Any]:
    """Return the JSON body, falling back to form fields for multipart requests."""

    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return body
    return request.form.to_dict()


# ------------------------------ Collaborators --------------------------------


def build_token_service() -> TokenService:
    """Token service configured with the app's token lifetimes."""

    cfg = AuthTokenConfig(
        access_expires=current_app.config["ACCESS_TOKEN_EXPIRES"],
        refresh_expires=current_app.config["REFRESH_TOKEN_EXPIRES"],
    )
    return TokenService(JWTTokenProvider(), cfg)


def media_uploader():
    return get_media_uploader()


# --------------------------------- Cookies -----------------------------------


def _cookie_options() -> dict[str, Any]:
    return {
        "httponly": True,
        "secure": bool(current_app.config.get("JWT_COOKIE_SECURE", True)),
        "samesite": current_app.config.get("JWT_COOKIE_SAMESITE"),
        "path": "/",
    }


def set_auth_cookies(response: Response, tokens: TokenPairOut) -> Response:
    """Attach both tokens as HTTP-only cookies."""

    opts = _cookie_options()
    response.set_cookie(current_app.config["JWT_ACCESS_COOKIE_NAME"], tokens.access_token, **opts)
    response.set_cookie(current_app.config["JWT_REFRESH_COOKIE_NAME"], tokens.refresh_token, **opts)
    return response


def unset_auth_cookies(response: Response) -> Response:
    opts = _cookie_options()
    response.delete_cookie(current_app.config["JWT_ACCESS_COOKIE_NAME"], **opts)
    response.delete_cookie(current_app.config["JWT_REFRESH_COOKIE_NAME"], **opts)
    return response
