"""
UserService
===========

Account-level reads and profile updates for the authenticated user, plus the
public channel profile and watch history.
"""

from __future__ import annotations

import logging

from vidshare.repositories.user import UserRepository
from vidshare.services._shared.base import BaseService, ServiceContext
from vidshare.services._shared.converters import to_user_out, to_video_out
from vidshare.services._shared.dto import UserOut, VideoOut
from vidshare.services._shared.errors import (
    ConflictError,
    MediaUploadError,
    NotFoundError,
    ServiceError,
)
from vidshare.services._shared.ports.media_uploader import MediaUploader
from vidshare.services.users.dto import ChannelProfileOut, UpdateAccountIn

logger = logging.getLogger(__name__)


def _present(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class UserService(BaseService):
    """Profile, media and channel operations on users."""

    def __init__(
        self,
        *,
        media: MediaUploader | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.media = media

    def current_user(self) -> UserOut:
        """Return the caller's public profile."""
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            user = uow.users.get(actor_id)
            if user is None:
                raise NotFoundError("User", actor_id)
            return to_user_out(user)

    def update_account(self, dto: UpdateAccountIn) -> UserOut:
        """
        Update display name and/or email.

        :raises ServiceError: If neither field carries a value.
        :raises ConflictError: If the new email belongs to another user.
        """
        actor_id = self.require_actor()
        changes: dict[str, str] = {}
        if (full_name := _present(dto.full_name)) is not None:
            changes["full_name"] = full_name
        if (email := _present(dto.email)) is not None:
            changes["email"] = email.lower()
        if not changes:
            raise ServiceError("At least one of fullName or email is required")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(actor_id)
            if user is None:
                raise NotFoundError("User", actor_id)
            if "email" in changes and changes["email"] != user.email:
                other = repo.get_by_email(changes["email"])
                if other is not None and other.id != user.id:
                    raise ConflictError("User", "Email is already in use")
            repo.assign_updates(user, changes)
            logger.info("Account updated", extra={"user_id": user.id, "fields": sorted(changes)})
            return to_user_out(user)

    def update_avatar(self, local_path: str | None) -> UserOut:
        """Upload a new avatar and point the profile at it."""
        return self._replace_image("avatar", "avatar", local_path)

    def update_cover_image(self, local_path: str | None) -> UserOut:
        """Upload a new cover image and point the profile at it."""
        return self._replace_image("cover_image", "cover image", local_path)

    def _replace_image(self, field: str, label: str, local_path: str | None) -> UserOut:
        actor_id = self.require_actor()
        if not local_path:
            raise ServiceError(f"{label.capitalize()} file is missing")
        if self.media is None:
            raise RuntimeError("UserService requires a media uploader for image updates.")
        uploaded = self.media.upload(local_path)
        if uploaded is None:
            raise MediaUploadError(label)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(actor_id)
            if user is None:
                raise NotFoundError("User", actor_id)
            repo.assign_updates(user, {field: uploaded.url})
            logger.info("Profile image replaced", extra={"user_id": user.id, "field": field})
            return to_user_out(user)

    def channel_profile(self, username: str | None) -> ChannelProfileOut:
        """
        Build the public channel page for ``username``.

        :raises ServiceError: If the username is blank.
        :raises NotFoundError: If no such channel exists.
        """
        handle = _present(username)
        if handle is None:
            raise ServiceError("Username is missing")
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(handle)
            if user is None:
                raise NotFoundError("Channel", handle)
            subs = uow.subscriptions
            is_subscribed = bool(self.ctx.actor_id) and subs.exists(
                subscriber_id=self.ctx.actor_id, channel_id=user.id
            )
            return ChannelProfileOut(
                id=user.id,
                username=user.username,
                full_name=user.full_name,
                email=user.email,
                avatar=user.avatar,
                cover_image=user.cover_image,
                subscribers_count=subs.count(channel_id=user.id),
                channels_subscribed_to_count=subs.count(subscriber_id=user.id),
                is_subscribed=is_subscribed,
            )

    def watch_history(self) -> list[VideoOut]:
        """Return the caller's watched videos, most recent first."""
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            return [to_video_out(v) for v in uow.users.watch_history(actor_id)]
