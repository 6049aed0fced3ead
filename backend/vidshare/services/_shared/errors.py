"""
Typed failures raised by services, repositories and models.

Nothing here knows about HTTP. :mod:`vidshare.core.errors` maps each class to
a status code and response envelope.
"""

from __future__ import annotations

from dataclasses import dataclass


class ServiceError(Exception):
    """
    Root of every service failure.

    Raised directly it means the caller sent something unusable (a malformed
    identifier, a missing required field) and maps to ``400``.
    """


class AuthenticationError(ServiceError):
    """Credentials or tokens could not be verified (``401``)."""


class InvalidTokenError(AuthenticationError):
    """A token failed verification: expired, tampered, malformed or wrong type."""


class AuthorizationError(ServiceError):
    """The caller is authenticated but does not own the resource (``403``)."""


@dataclass(slots=True, eq=False)
class NotFoundError(ServiceError):
    """
    The referenced row does not exist, or is hidden from the caller (``404``).

    :param entity: Model name, e.g. ``"Video"``.
    :type entity: str
    :param key: Identifier that was looked up.
    :type key: str
    """

    entity: str
    key: str

    def __str__(self) -> str:
        return f"{self.entity} not found"


@dataclass(slots=True, eq=False)
class ConflictError(ServiceError):
    """
    The write would duplicate a unique value (``409``).

    :param entity: Model name, e.g. ``"User"``.
    :type entity: str
    :param detail: Message returned to the client.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return self.detail


@dataclass(slots=True, eq=False)
class MediaUploadError(ServiceError):
    """
    Raised when the object store rejects or fails an upload.

    :param asset: Human name of the asset that failed ("avatar", "thumbnail").
    :type asset: str
    """

    asset: str

    def __str__(self) -> str:
        return f"Error while uploading {self.asset}"
