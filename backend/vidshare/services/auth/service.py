# vidshare/services/auth/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidshare.repositories.user import UserRepository
from vidshare.services._shared.base import BaseService, ServiceContext
from vidshare.services._shared.converters import to_user_out
from vidshare.services._shared.dto import UserOut
from vidshare.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    InvalidTokenError,
    MediaUploadError,
    NotFoundError,
    ServiceError,
)
from vidshare.services._shared.ports.media_uploader import MediaUploader
from vidshare.services.auth.dto import (
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    RefreshIn,
    RegisterIn,
    TokenPairOut,
)
from vidshare.services.auth.tokens import REFRESH_TOKEN_TYPE, TokenService

logger = logging.getLogger(__name__)

DUPLICATE_USER = "User with email or username already exists"
STALE_REFRESH = "Refresh token is expired or used"


class AuthService(BaseService):
    """
    Credential lifecycle: register, login, refresh, logout, password change.

    The user row keeps exactly one accepted refresh token. Login overwrites
    it, refresh swaps it atomically, logout clears it; any token that no
    longer matches the stored value is rejected.
    """

    def __init__(
        self,
        *,
        tokens: TokenService,
        media: MediaUploader | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param tokens: Token issuance/verification service.
        :param media: Object-store uploader (needed by :meth:`register` only).
        :param ctx: Request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = tokens
        self.media = media

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> UserOut:
        """
        Create an account after uploading its avatar (and optional cover).

        :raises ConflictError: If email or username is taken.
        :raises ServiceError: If no avatar file was provided.
        :raises MediaUploadError: If an upload fails.
        """
        with self.ro_uow() as uow:
            if uow.users.exists_by_email_or_username(email=dto.email, username=dto.username):
                raise ConflictError("User", DUPLICATE_USER)

        if not dto.avatar_path:
            raise ServiceError("Avatar file is required")
        if self.media is None:
            raise RuntimeError("AuthService.register requires a media uploader.")

        avatar = self.media.upload(dto.avatar_path)
        if avatar is None:
            raise MediaUploadError("avatar")
        cover_url: str | None = None
        if dto.cover_image_path:
            cover = self.media.upload(dto.cover_image_path)
            if cover is None:
                raise MediaUploadError("cover image")
            cover_url = cover.url

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.model(
                full_name=dto.full_name,
                email=dto.email,
                username=dto.username,
                avatar=avatar.url,
                cover_image=cover_url,
            )
            user.password = dto.password
            try:
                repo.add(user)
            except IntegrityError as exc:
                # Lost a race against a concurrent registration
                raise ConflictError("User", DUPLICATE_USER) from exc
            logger.info("User registered", extra={"user_id": user.id})
            return to_user_out(user)

    # ------------------------------------------------------------------ #
    # Login / Logout
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Verify credentials, issue a token pair and store the refresh token.

        :raises ServiceError: If neither email nor username is given.
        :raises NotFoundError: If no user matches.
        :raises AuthenticationError: On password mismatch.
        """
        if not dto.email and not dto.username:
            raise ServiceError("Username or email is required")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.find_by_login(email=dto.email, username=dto.username)
            if user is None:
                raise NotFoundError("User", dto.email or dto.username or "")
            if not user.verify_password(dto.password):
                logger.warning("Login rejected", extra={"user_id": user.id})
                raise AuthenticationError("Invalid user credentials")

            pair = self.tokens.issue_pair(user)
            repo.set_refresh_token(user.id, pair.refresh_token)
            logger.info("User logged in", extra={"user_id": user.id})
            return LoginOut(user=to_user_out(user), tokens=pair)

    def logout(self) -> None:
        """Forget the caller's refresh token so it can no longer be rotated."""
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            uow.users.set_refresh_token(actor_id, None)
        logger.info("User logged out", extra={"user_id": actor_id})

    # ------------------------------------------------------------------ #
    # Refresh with single-slot rotation
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Exchange the stored refresh token for a new pair.

        The presented token must verify and equal the stored value. The
        replacement is written with a compare-and-swap, so a token that was
        already rotated away (or raced by a concurrent refresh) is rejected.

        :raises AuthenticationError: If the token is missing, invalid or stale.
        """
        if not dto.refresh_token:
            raise AuthenticationError("Unauthorized request")
        claims = self.tokens.verify(dto.refresh_token, REFRESH_TOKEN_TYPE)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(str(claims["sub"]))
            if user is None:
                raise InvalidTokenError("Invalid refresh token")
            if user.refresh_token != dto.refresh_token:
                logger.warning("Stale refresh token presented", extra={"user_id": user.id})
                raise AuthenticationError(STALE_REFRESH)

            pair = self.tokens.issue_pair(user)
            swapped = repo.swap_refresh_token(
                user.id, expected=dto.refresh_token, replacement=pair.refresh_token
            )
            if not swapped:
                raise AuthenticationError(STALE_REFRESH)
            logger.info("Refresh token rotated", extra={"user_id": user.id})
            return pair

    # ------------------------------------------------------------------ #
    # Password change
    # ------------------------------------------------------------------ #

    def change_password(self, dto: ChangePasswordIn) -> None:
        """
        Replace the caller's password after checking the old one.

        :raises AuthenticationError: If ``old_password`` does not verify.
        """
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(actor_id)
            if user is None:
                raise NotFoundError("User", actor_id)
            if not user.verify_password(dto.old_password):
                raise AuthenticationError("Invalid old password")
            user.password = dto.new_password
            repo.flush()
        logger.info("Password changed", extra={"user_id": actor_id})
