# vidshare/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from vidshare.services._shared.dto import UserOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param full_name: Display name.
    :type full_name: str
    :param email: Login email.
    :type email: str
    :param username: Public handle (stored lowercase).
    :type username: str
    :param password: Raw password (hashed by the model setter).
    :type password: str
    :param avatar_path: Temporary local path of the avatar file, if sent.
    :type avatar_path: str | None
    :param cover_image_path: Temporary local path of the cover image, if sent.
    :type cover_image_path: str | None
    """

    full_name: str
    email: str
    username: str
    password: str
    avatar_path: str | None = None
    cover_image_path: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login. At least one of ``email``/``username`` is set.

    :param password: Raw password (to be verified).
    :type password: str
    :param email: Login email.
    :type email: str | None
    :param username: Login handle.
    :type username: str | None
    """

    password: str
    email: str | None = None
    username: str | None = None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT presented by the client.
    :type refresh_token: str | None
    """

    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class ChangePasswordIn:
    """
    Input DTO for a password change.

    :param old_password: Current password.
    :type old_password: str
    :param new_password: Replacement password.
    :type new_password: str
    """

    old_password: str
    new_password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO for login: the user plus a fresh token pair.

    :param user: Public user representation.
    :type user: UserOut
    :param tokens: Issued access/refresh pair.
    :type tokens: TokenPairOut
    """

    user: UserOut
    tokens: TokenPairOut


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=7)
