"""Shared base class and request context for application services."""

from __future__ import annotations

from dataclasses import dataclass

from vidshare.models.video import Video
from vidshare.repositories.base import Pagination
from vidshare.services._shared.errors import AuthorizationError, NotFoundError, ServiceError
from vidshare.services._shared.policies.common import can_view_video, is_owner, is_valid_id
from vidshare.uow.base import UnitOfWork
from vidshare.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param actor_id: Authenticated user identifier (``None`` for anonymous).
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: str | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer shared validation helpers (identifiers, pagination, ownership).
    * Keep services orchestration-only, with no web or ORM leakage.

    Notes
    -----
    Services never touch the global session directly; they always go through
    a Unit of Work and return DTOs built before the unit of work closes.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work (commit on success)."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Create a read-only Unit of Work (flushes blocked, always rolled back)."""
        return SQLAlchemyReadOnlyUnitOfWork()

    # ----------------------- Validation utilities ---------------------------

    def ensure_valid_id(self, value: str | None, label: str) -> str:
        """
        Reject malformed identifiers before any lookup.

        :param value: Raw identifier from the route or body.
        :type value: str | None
        :param label: Entity label used in the message (e.g. ``"video"``).
        :type label: str
        :returns: The identifier unchanged.
        :rtype: str
        :raises ServiceError: If the identifier is missing or malformed.
        """
        if not is_valid_id(value):
            raise ServiceError(f"Invalid {label} ID")
        return str(value)

    def ensure_pagination(
        self, *, page: int, limit: int, sort: list[str] | None = None
    ) -> Pagination:
        """Build a :class:`Pagination` value object with basic clamping."""
        return Pagination(page=max(1, int(page)), limit=max(1, int(limit)), sort=list(sort or []))

    def require_actor(self) -> str:
        """
        Return the authenticated actor id.

        :raises AuthorizationError: If the service runs without an actor.
        """
        if not self.ctx.actor_id:
            raise AuthorizationError("Authentication required")
        return self.ctx.actor_id

    # --------------------------- AuthZ --------------------------------
    def ensure_owner(self, actor_id: str | None, owner_id: str, *, msg: str | None = None) -> None:
        """
        Ensure the current actor is the resource owner.

        :param actor_id: Authenticated user id.
        :param owner_id: Owner or author id stored on the resource.
        :param msg: Optional custom error message.
        :raises AuthorizationError: If actor is not the owner.
        """
        if actor_id is None or not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise AuthorizationError(msg or "You are not allowed to modify this resource")

    def visible_video(self, uow: UnitOfWork, video_id: str) -> Video:
        """
        Load a video the actor is allowed to see.

        :raises NotFoundError: If it does not exist or is an unpublished video
            of another channel.
        """
        video = uow.videos.get(video_id)
        if video is None or not can_view_video(video, self.ctx.actor_id):
            raise NotFoundError("Video", video_id)
        return video
