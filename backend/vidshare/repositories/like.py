"""Like repository: toggle primitives and liked-video listing."""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.orm import joinedload

from vidshare.models.like import Like
from vidshare.models.video import Video
from vidshare.repositories.base import BaseRepository


class LikeRepository(BaseRepository[Like]):
    """Persistence-only repository for :class:`Like`.

    Toggles are expressed as ``delete_where`` (compare-and-delete) followed by
    ``add``; the unique constraints reject a racing duplicate insert.
    """

    model = Like

    def _filterable_fields(self):
        return {
            "liked_by_id": Like.liked_by_id,
            "video_id": Like.video_id,
            "comment_id": Like.comment_id,
            "tweet_id": Like.tweet_id,
        }

    def liked_videos(self, user_id: str) -> list[Video]:
        """Videos liked by ``user_id`` that they can still see, most recent like first."""
        stmt = (
            select(Video)
            .join(Like, Like.video_id == Video.id)
            .where(Like.liked_by_id == user_id)
            .where(or_(Video.is_published.is_(True), Video.owner_id == user_id))
            .options(joinedload(Video.owner))
            .order_by(Like.created_at.desc(), Like.id.asc())
        )
        return list(self.session.execute(stmt).scalars().unique().all())
