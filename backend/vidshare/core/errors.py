"""Centralized JSON envelope error handling for the API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from vidshare.core.logger import ensure_request_id
from vidshare.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    MediaUploadError,
    NotFoundError,
    ServiceError,
)

log = logging.getLogger(__name__)


def failure_envelope(
    *,
    status: int,
    message: str,
    errors: list[Any] | None = None,
) -> dict[str, Any]:
    """
    Build the failure envelope returned by every endpoint.

    :param status: HTTP status code.
    :param message: Human-readable error summary (safe for clients).
    :param errors: Optional list of safe, structured details.
    :returns: ``{statusCode, message, error, success}`` mapping.
    :rtype: dict
    """
    return {
        "statusCode": int(status),
        "message": message,
        "error": list(errors or []),
        "success": False,
    }


def _failure_response(envelope: dict[str, Any]) -> Response:
    resp = jsonify(envelope)
    resp.status_code = envelope["statusCode"]
    return resp


def _flatten_messages(messages: Any, prefix: str = "") -> list[str]:
    """Flatten marshmallow's nested ``{field: [msg, ...]}`` into ``field: msg`` lines."""
    if isinstance(messages, dict):
        out: list[str] = []
        for key, value in messages.items():
            field = f"{prefix}.{key}" if prefix else str(key)
            out.extend(_flatten_messages(value, field))
        return out
    if isinstance(messages, (list, tuple)):
        out = []
        for value in messages:
            out.extend(_flatten_messages(value, prefix))
        return out
    return [f"{prefix}: {messages}" if prefix else str(messages)]


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    errors : list[Any] | None, optional
        Optional details rendered in the envelope's ``error`` list.
    """

    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.BAD_REQUEST,
        errors: list[Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.errors = list(errors or [])

    def to_envelope(self) -> dict[str, Any]:
        """Serialize error metadata into the failure envelope."""
        return failure_envelope(status=self.status_code, message=self.message, errors=self.errors)


# Domain conveniences
class BadRequest(APIError):
    """400 for malformed identifiers or missing fields."""

    def __init__(self, message: str = "Bad request", errors: list[Any] | None = None) -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, errors=errors)


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized request") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED)


class Forbidden(APIError):
    """403 when the caller does not own the resource."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN)


class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND)


class Conflict(APIError):
    """409 for uniqueness collisions."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT)


class InternalError(APIError):
    """500 for failures of collaborators (hashing, token issuance, uploads)."""

    def __init__(self, message: str = "Something went wrong") -> None:
        super().__init__(message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR)


def translate_service_error(exc: ServiceError) -> APIError:
    """
    Map a service-level error onto its API error, preserving the message.

    Order matters: subclasses are checked before :class:`ServiceError`.
    """
    if isinstance(exc, AuthenticationError):
        return Unauthorized(str(exc))
    if isinstance(exc, AuthorizationError):
        return Forbidden(str(exc))
    if isinstance(exc, NotFoundError):
        return NotFound(str(exc))
    if isinstance(exc, ConflictError):
        return Conflict(str(exc))
    if isinstance(exc, MediaUploadError):
        return InternalError(str(exc))
    return BadRequest(str(exc))


def _log_api_error(err: APIError, origin: str) -> None:
    # 4xx → warning; 5xx → error
    level = log.error if err.status_code >= 500 else log.warning
    level(
        "%s: status=%s msg=%s request_id=%s",
        origin,
        err.status_code,
        err.message,
        ensure_request_id(),
    )


def init_app(app: Flask) -> None:
    """
    Attach envelope error handlers to the Flask app.

    Notes
    -----
    - Every handled error leaves as ``{statusCode, message, error, success}``.
    - 5xx are logged with ``exc_info``; 4xx as warnings.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        _log_api_error(err, "APIError")
        return _failure_response(err.to_envelope())

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        api_err = translate_service_error(err)
        _log_api_error(api_err, type(err).__name__)
        return _failure_response(api_err.to_envelope())

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = (err.description or HTTPStatus(status).phrase).strip()
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        level("HTTPException: status=%s detail=%s", status, message)
        return _failure_response(failure_envelope(status=status, message=message))

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        details = _flatten_messages(err.messages)
        log.warning("ValidationError: fields=%s", details)
        return _failure_response(
            failure_envelope(
                status=HTTPStatus.BAD_REQUEST,
                message=details[0] if len(details) == 1 else "Validation failed",
                errors=details,
            )
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        log.error("IntegrityError", exc_info=True)
        return _failure_response(
            failure_envelope(status=HTTPStatus.CONFLICT, message="Resource already exists")
        )

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        log.error("OperationalError", exc_info=True)
        return _failure_response(
            failure_envelope(
                status=HTTPStatus.INTERNAL_SERVER_ERROR,
                message="Database temporarily unavailable",
            )
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error("Unhandled exception", exc_info=True)
        return _failure_response(
            failure_envelope(
                status=HTTPStatus.INTERNAL_SERVER_ERROR,
                message="Something went wrong",
            )
        )
