"""Channel subscriptions: toggle and list in both directions."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidshare.repositories.subscription import SubscriptionRepository
from vidshare.services._shared.base import BaseService
from vidshare.services._shared.converters import to_owner_out
from vidshare.services._shared.dto import OwnerOut
from vidshare.services._shared.errors import NotFoundError, ServiceError
from vidshare.services.subscriptions.dto import SubscriptionToggleOut

logger = logging.getLogger(__name__)


class SubscriptionService(BaseService):
    """Application service for subscriptions."""

    def toggle_subscription(self, channel_id: str) -> SubscriptionToggleOut:
        """
        Subscribe the caller to ``channel_id``, or unsubscribe if already subscribed.

        :raises ServiceError: On a malformed id or self-subscription.
        :raises NotFoundError: If the channel does not exist.
        """
        actor_id = self.require_actor()
        channel_id = self.ensure_valid_id(channel_id, "channel")
        if channel_id == actor_id:
            raise ServiceError("You cannot subscribe to your own channel")

        with self.rw_uow() as uow:
            if uow.users.get(channel_id) is None:
                raise NotFoundError("Channel", channel_id)
            repo: SubscriptionRepository = uow.subscriptions
            removed = repo.delete_where(subscriber_id=actor_id, channel_id=channel_id)
            subscribed = not removed
            if subscribed:
                try:
                    with uow.session.begin_nested():
                        repo.add(repo.model(subscriber_id=actor_id, channel_id=channel_id))
                except IntegrityError:
                    logger.info(
                        "Concurrent subscription already present",
                        extra={"channel_id": channel_id},
                    )
            logger.info(
                "Subscription toggled",
                extra={"channel_id": channel_id, "subscribed": subscribed},
            )
            return SubscriptionToggleOut(channel_id=channel_id, subscribed=subscribed)

    def channel_subscribers(self, channel_id: str) -> list[OwnerOut]:
        """Users subscribed to a channel.

        :raises NotFoundError: If the channel does not exist.
        """
        channel_id = self.ensure_valid_id(channel_id, "channel")
        with self.ro_uow() as uow:
            if uow.users.get(channel_id) is None:
                raise NotFoundError("Channel", channel_id)
            return [to_owner_out(u) for u in uow.subscriptions.subscribers_of(channel_id)]

    def subscribed_channels(self, subscriber_id: str) -> list[OwnerOut]:
        """Channels a user is subscribed to.

        :raises NotFoundError: If the subscriber does not exist.
        """
        subscriber_id = self.ensure_valid_id(subscriber_id, "subscriber")
        with self.ro_uow() as uow:
            if uow.users.get(subscriber_id) is None:
                raise NotFoundError("User", subscriber_id)
            return [to_owner_out(u) for u in uow.subscriptions.channels_of(subscriber_id)]
