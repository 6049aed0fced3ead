"""Tweet model (short text post on a channel)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.core.extensions import db

from .base import ID_LENGTH, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Tweet(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Short post authored by exactly one user."""

    __tablename__ = "tweets"

    owner_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    owner: Mapped[User] = relationship()

    __table_args__ = (Index("ix_tweets_owner_id_created_at", "owner_id", "created_at"),)
