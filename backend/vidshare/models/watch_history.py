"""Watch history entries (user watched video at time)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.core.extensions import db

from .base import ID_LENGTH, PKMixin, ReprMixin, utcnow

if TYPE_CHECKING:
    from .user import User
    from .video import Video


class WatchHistoryEntry(PKMixin, ReprMixin, db.Model):
    """
    One row per (user, video); re-watching bumps ``watched_at``.

    Ordering by ``watched_at`` descending yields the history, most recent
    first.
    """

    __tablename__ = "watch_history"

    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    video_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    watched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    user: Mapped[User] = relationship(back_populates="watch_history")
    video: Mapped[Video] = relationship()

    __table_args__ = (UniqueConstraint("user_id", "video_id", name="uq_watch_history_user_video"),)
