"""Comment model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.core.extensions import db

from .base import ID_LENGTH, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Comment(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Comment left by a user under a video. Mutable by its author only."""

    __tablename__ = "comments"

    video_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    owner_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    owner: Mapped[User] = relationship()

    __table_args__ = (Index("ix_comments_video_id_created_at", "video_id", "created_at"),)
