"""Comments under videos: list, add, edit and delete (author only)."""

from __future__ import annotations

import logging

from vidshare.models.comment import Comment
from vidshare.repositories.comment import CommentRepository
from vidshare.services._shared.base import BaseService
from vidshare.services._shared.converters import to_owner_out
from vidshare.services._shared.dto import PageOut
from vidshare.services._shared.errors import NotFoundError, ServiceError
from vidshare.services.comments.dto import CommentOut

logger = logging.getLogger(__name__)


def _to_out(comment: Comment) -> CommentOut:
    return CommentOut(
        id=comment.id,
        video_id=comment.video_id,
        owner=to_owner_out(comment.owner),
        content=comment.content,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


def _require_content(content: str | None) -> str:
    value = (content or "").strip()
    if not value:
        raise ServiceError("Content is required")
    return value


class CommentService(BaseService):
    """Application service for comments."""

    def list_comments(self, video_id: str, *, page: int, limit: int) -> PageOut[CommentOut]:
        """Page through a video's comments, newest first.

        :raises NotFoundError: If the video does not exist or is hidden from the caller.
        """
        video_id = self.ensure_valid_id(video_id, "video")
        pagination = self.ensure_pagination(page=page, limit=limit, sort=["-created_at"])
        with self.ro_uow() as uow:
            self.visible_video(uow, video_id)
            repo: CommentRepository = uow.comments
            result = repo.paginate(pagination, filters={"video_id": video_id})
            return PageOut(
                items=[_to_out(c) for c in result.items],
                total=result.total,
                page=result.page,
                limit=result.limit,
            )

    def add_comment(self, video_id: str, content: str | None) -> CommentOut:
        """Add a comment by the caller under a video.

        :raises NotFoundError: If the video does not exist or is hidden from the caller.
        """
        actor_id = self.require_actor()
        video_id = self.ensure_valid_id(video_id, "video")
        text = _require_content(content)
        with self.rw_uow() as uow:
            self.visible_video(uow, video_id)
            repo: CommentRepository = uow.comments
            comment = repo.add(repo.model(video_id=video_id, owner_id=actor_id, content=text))
            logger.info("Comment added", extra={"comment_id": comment.id, "video_id": video_id})
            return _to_out(comment)

    def ensure_editable(self, comment_id: str) -> None:
        """Raise unless the caller may edit this comment; nothing is changed."""
        comment_id = self.ensure_valid_id(comment_id, "comment")
        with self.ro_uow() as uow:
            comment = uow.comments.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            self.ensure_owner(
                self.ctx.actor_id, comment.owner_id, msg="You can only edit your own comments"
            )

    def update_comment(self, comment_id: str, content: str | None) -> CommentOut:
        """Replace the text of a comment authored by the caller.

        :raises NotFoundError: If the comment does not exist.
        :raises AuthorizationError: If the caller is not the author.
        """
        comment_id = self.ensure_valid_id(comment_id, "comment")
        with self.rw_uow() as uow:
            repo: CommentRepository = uow.comments
            comment = repo.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            self.ensure_owner(
                self.ctx.actor_id, comment.owner_id, msg="You can only edit your own comments"
            )
            repo.update(comment, content=_require_content(content))
            return _to_out(comment)

    def delete_comment(self, comment_id: str) -> None:
        """Delete a comment authored by the caller.

        :raises NotFoundError: If the comment does not exist.
        :raises AuthorizationError: If the caller is not the author.
        """
        comment_id = self.ensure_valid_id(comment_id, "comment")
        with self.rw_uow() as uow:
            repo: CommentRepository = uow.comments
            comment = repo.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            self.ensure_owner(
                self.ctx.actor_id, comment.owner_id, msg="You can only delete your own comments"
            )
            repo.delete(comment)
            logger.info("Comment deleted", extra={"comment_id": comment_id})
