"""Subscription repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from vidshare.models.subscription import Subscription
from vidshare.models.user import User
from vidshare.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    """Persistence-only repository for :class:`Subscription`."""

    model = Subscription

    def _filterable_fields(self):
        return {
            "subscriber_id": Subscription.subscriber_id,
            "channel_id": Subscription.channel_id,
        }

    def subscribers_of(self, channel_id: str) -> list[User]:
        """Users subscribed to ``channel_id``, newest subscription first."""
        stmt = (
            select(Subscription)
            .where(Subscription.channel_id == channel_id)
            .options(joinedload(Subscription.subscriber))
            .order_by(Subscription.created_at.desc(), Subscription.id.asc())
        )
        return [s.subscriber for s in self.session.execute(stmt).scalars().all()]

    def channels_of(self, subscriber_id: str) -> list[User]:
        """Channels ``subscriber_id`` follows, newest subscription first."""
        stmt = (
            select(Subscription)
            .where(Subscription.subscriber_id == subscriber_id)
            .options(joinedload(Subscription.channel))
            .order_by(Subscription.created_at.desc(), Subscription.id.asc())
        )
        return [s.channel for s in self.session.execute(stmt).scalars().all()]
