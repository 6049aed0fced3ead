"""Like model: one user liking exactly one video, comment or tweet."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vidshare.core.extensions import db

from .base import ID_LENGTH, PKMixin, ReprMixin, TimestampMixin

# Exactly one target column must be set
_ONE_TARGET = (
    "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END"
    " + CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END"
    " + CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1"
)


class Like(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Join row whose existence means "liked".

    Fields
    ------
    liked_by_id : str
        User who liked the target.
    video_id / comment_id / tweet_id : str | None
        Target reference; exactly one is set.
    """

    __tablename__ = "likes"

    liked_by_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    video_id: Mapped[str | None] = mapped_column(
        String(ID_LENGTH), ForeignKey("videos.id", ondelete="CASCADE"), nullable=True, index=True
    )
    comment_id: Mapped[str | None] = mapped_column(
        String(ID_LENGTH), ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    )
    tweet_id: Mapped[str | None] = mapped_column(
        String(ID_LENGTH), ForeignKey("tweets.id", ondelete="CASCADE"), nullable=True
    )

    __table_args__ = (
        CheckConstraint(_ONE_TARGET, name="exactly_one_target"),
        UniqueConstraint("liked_by_id", "video_id", name="uq_likes_user_video"),
        UniqueConstraint("liked_by_id", "comment_id", name="uq_likes_user_comment"),
        UniqueConstraint("liked_by_id", "tweet_id", name="uq_likes_user_tweet"),
    )
