"""Subscription model: a user following a channel."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.core.extensions import db

from .base import ID_LENGTH, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Subscription(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Join row whose existence means ``subscriber`` follows ``channel``."""

    __tablename__ = "subscriptions"

    subscriber_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    channel_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    subscriber: Mapped[User] = relationship(foreign_keys=[subscriber_id])
    channel: Mapped[User] = relationship(foreign_keys=[channel_id])

    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
        CheckConstraint("subscriber_id <> channel_id", name="not_self"),
    )
