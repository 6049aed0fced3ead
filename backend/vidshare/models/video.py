"""Video model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from vidshare.core.extensions import db

from .base import ID_LENGTH, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Video(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Uploaded video owned by exactly one channel.

    Fields
    ------
    owner_id : str
        Channel (user) that published the video.
    video_file : str
        Object-store URL of the media file.
    thumbnail : str
        Object-store URL of the thumbnail image.
    title : str
        Non-empty title (trimmed).
    description : str
        Free text description.
    duration : float
        Length in seconds as reported by the object store.
    views : int
        View counter, incremented on each successful fetch.
    is_published : bool
        Unpublished videos are visible to their owner only.
    """

    __tablename__ = "videos"

    owner_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    video_file: Mapped[str] = mapped_column(String(512), nullable=False)
    thumbnail: Mapped[str] = mapped_column(String(512), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="1"
    )

    owner: Mapped[User] = relationship(back_populates="videos")

    __table_args__ = (
        CheckConstraint("views >= 0", name="views_non_negative"),
        CheckConstraint("duration >= 0", name="duration_non_negative"),
        Index("ix_videos_owner_id_created_at", "owner_id", "created_at"),
    )

    @validates("title")
    def _normalize_title(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Title is required.")
        return value.strip()
