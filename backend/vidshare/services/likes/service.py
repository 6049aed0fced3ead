"""
LikeService
===========

Toggle likes on videos, comments and tweets, and list liked videos.

A toggle is one compare-and-delete; when nothing was deleted a like row is
inserted inside a SAVEPOINT. A concurrent toggle that inserted the same row
first trips the unique constraint, which is reported as the liked state.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidshare.repositories.like import LikeRepository
from vidshare.services._shared.base import BaseService
from vidshare.services._shared.converters import to_video_out
from vidshare.services._shared.dto import VideoOut
from vidshare.services._shared.errors import NotFoundError
from vidshare.services._shared.policies.common import can_view_video
from vidshare.services.likes.dto import LikeToggleOut

logger = logging.getLogger(__name__)

# target type → (Like column, uow repository attribute, entity label)
_TARGETS = {
    "video": ("video_id", "videos", "Video"),
    "comment": ("comment_id", "comments", "Comment"),
    "tweet": ("tweet_id", "tweets", "Tweet"),
}


class LikeService(BaseService):
    """Application service for likes."""

    def toggle_video_like(self, video_id: str) -> LikeToggleOut:
        return self._toggle("video", video_id)

    def toggle_comment_like(self, comment_id: str) -> LikeToggleOut:
        return self._toggle("comment", comment_id)

    def toggle_tweet_like(self, tweet_id: str) -> LikeToggleOut:
        return self._toggle("tweet", tweet_id)

    def _toggle(self, target_type: str, target_id: str) -> LikeToggleOut:
        actor_id = self.require_actor()
        column, repo_name, label = _TARGETS[target_type]
        target_id = self.ensure_valid_id(target_id, target_type)

        with self.rw_uow() as uow:
            if target_type == "video":
                self.visible_video(uow, target_id)
            else:
                target = getattr(uow, repo_name).get(target_id)
                # Comments under another channel's draft are hidden with it
                if target is None or (
                    target_type == "comment"
                    and not can_view_video(uow.videos.get(target.video_id), actor_id)
                ):
                    raise NotFoundError(label, target_id)

            repo: LikeRepository = uow.likes
            removed = repo.delete_where(liked_by_id=actor_id, **{column: target_id})
            if removed:
                liked = False
            else:
                liked = True
                try:
                    with uow.session.begin_nested():
                        repo.add(repo.model(liked_by_id=actor_id, **{column: target_id}))
                except IntegrityError:
                    logger.info(
                        "Concurrent like already present",
                        extra={"target_type": target_type, "target_id": target_id},
                    )

            logger.info(
                "Like toggled",
                extra={"target_type": target_type, "target_id": target_id, "liked": liked},
            )
            return LikeToggleOut(target_type=target_type, target_id=target_id, liked=liked)

    def liked_videos(self) -> list[VideoOut]:
        """Videos the caller has liked, most recent like first."""
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            repo: LikeRepository = uow.likes
            return [to_video_out(v) for v in repo.liked_videos(actor_id)]
