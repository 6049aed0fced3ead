"""Tweets: short text posts on a channel."""

from __future__ import annotations

import logging

from vidshare.models.tweet import Tweet
from vidshare.repositories.tweet import TweetRepository
from vidshare.services._shared.base import BaseService
from vidshare.services._shared.converters import to_owner_out
from vidshare.services._shared.errors import NotFoundError, ServiceError
from vidshare.services.tweets.dto import TweetOut

logger = logging.getLogger(__name__)


def _to_out(tweet: Tweet) -> TweetOut:
    return TweetOut(
        id=tweet.id,
        owner=to_owner_out(tweet.owner),
        content=tweet.content,
        created_at=tweet.created_at,
        updated_at=tweet.updated_at,
    )


def _require_content(content: str | None) -> str:
    value = (content or "").strip()
    if not value:
        raise ServiceError("Content is required")
    return value


class TweetService(BaseService):
    """Application service for tweets."""

    def create_tweet(self, content: str | None) -> TweetOut:
        actor_id = self.require_actor()
        text = _require_content(content)
        with self.rw_uow() as uow:
            repo: TweetRepository = uow.tweets
            tweet = repo.add(repo.model(owner_id=actor_id, content=text))
            logger.info("Tweet created", extra={"tweet_id": tweet.id})
            return _to_out(tweet)

    def user_tweets(self, user_id: str) -> list[TweetOut]:
        """List a user's tweets, newest first.

        :raises NotFoundError: If the user does not exist.
        """
        user_id = self.ensure_valid_id(user_id, "user")
        with self.ro_uow() as uow:
            if uow.users.get(user_id) is None:
                raise NotFoundError("User", user_id)
            repo: TweetRepository = uow.tweets
            tweets = repo.list(filters={"owner_id": user_id}, sort=["-created_at"])
            return [_to_out(t) for t in tweets]

    def ensure_editable(self, tweet_id: str) -> None:
        """Raise unless the caller may edit this tweet; nothing is changed."""
        tweet_id = self.ensure_valid_id(tweet_id, "tweet")
        with self.ro_uow() as uow:
            tweet = uow.tweets.get(tweet_id)
            if tweet is None:
                raise NotFoundError("Tweet", tweet_id)
            self.ensure_owner(
                self.ctx.actor_id, tweet.owner_id, msg="You can only edit your own tweets"
            )

    def update_tweet(self, tweet_id: str, content: str | None) -> TweetOut:
        """Replace the text of a tweet authored by the caller.

        :raises NotFoundError: If the tweet does not exist.
        :raises AuthorizationError: If the caller is not the author.
        """
        tweet_id = self.ensure_valid_id(tweet_id, "tweet")
        with self.rw_uow() as uow:
            repo: TweetRepository = uow.tweets
            tweet = repo.get(tweet_id)
            if tweet is None:
                raise NotFoundError("Tweet", tweet_id)
            self.ensure_owner(
                self.ctx.actor_id, tweet.owner_id, msg="You can only edit your own tweets"
            )
            repo.update(tweet, content=_require_content(content))
            return _to_out(tweet)

    def delete_tweet(self, tweet_id: str) -> None:
        """Delete a tweet authored by the caller.

        :raises NotFoundError: If the tweet does not exist.
        :raises AuthorizationError: If the caller is not the author.
        """
        tweet_id = self.ensure_valid_id(tweet_id, "tweet")
        with self.rw_uow() as uow:
            repo: TweetRepository = uow.tweets
            tweet = repo.get(tweet_id)
            if tweet is None:
                raise NotFoundError("Tweet", tweet_id)
            self.ensure_owner(
                self.ctx.actor_id, tweet.owner_id, msg="You can only delete your own tweets"
            )
            repo.delete(tweet)
            logger.info("Tweet deleted", extra={"tweet_id": tweet_id})
