"""Video repository with search, visibility and view counting."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, or_, select, update
from sqlalchemy.orm import joinedload

from vidshare.models.like import Like
from vidshare.models.video import Video
from vidshare.repositories.base import BaseRepository, Page, Pagination


class VideoRepository(BaseRepository[Video]):
    """Persistence-only repository for :class:`Video`."""

    model = Video

    def _sortable_fields(self):
        return {
            "created_at": Video.created_at,
            "createdAt": Video.created_at,
            "views": Video.views,
            "duration": Video.duration,
            "title": Video.title,
        }

    def _filterable_fields(self):
        return {
            "owner_id": Video.owner_id,
            "is_published": Video.is_published,
        }

    def _updatable_fields(self):
        return {"title", "description", "thumbnail", "is_published"}

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.options(joinedload(Video.owner))

    # ---------------------------- Listing ----------------------------

    def search(
        self,
        pagination: Pagination,
        *,
        query: str | None = None,
        owner_id: str | None = None,
        include_unpublished: bool = False,
    ) -> Page[Video]:
        """Page through videos filtered by text, owner and visibility.

        :param pagination: Page, limit and sort tokens.
        :type pagination: Pagination
        :param query: Case-insensitive substring matched on title or description.
        :type query: str | None
        :param owner_id: Restrict to one channel.
        :type owner_id: str | None
        :param include_unpublished: Also return unpublished rows (owner view).
        :type include_unpublished: bool
        :returns: Page of videos with owners loaded.
        :rtype: Page[Video]
        """
        stmt: Select[Any] = select(Video)
        if owner_id:
            stmt = stmt.where(Video.owner_id == owner_id)
        if not include_unpublished:
            stmt = stmt.where(Video.is_published.is_(True))
        if query:
            pattern = f"%{query.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(Video.title).like(pattern),
                    func.lower(Video.description).like(pattern),
                )
            )
        return self.paginate_statement(stmt, pagination)

    # ---------------------------- Counters ----------------------------

    def increment_views(self, video: Video) -> None:
        """Bump the view counter with a single atomic ``UPDATE`` and reload it."""
        self.session.execute(
            update(Video)
            .where(Video.id == video.id)
            .values(views=Video.views + 1, updated_at=Video.updated_at)
            .execution_options(synchronize_session=False)
        )
        self.session.refresh(video, attribute_names=["views"])

    def channel_totals(self, owner_id: str) -> tuple[int, int]:
        """Return ``(video_count, total_views)`` for a channel."""
        row = self.session.execute(
            select(func.count(Video.id), func.coalesce(func.sum(Video.views), 0)).where(
                Video.owner_id == owner_id
            )
        ).one()
        return int(row[0]), int(row[1])

    def channel_like_total(self, owner_id: str) -> int:
        """Count likes received by every video of a channel."""
        stmt = (
            select(func.count(Like.id))
            .join(Video, Like.video_id == Video.id)
            .where(Video.owner_id == owner_id)
        )
        return int(self.session.execute(stmt).scalar_one())
