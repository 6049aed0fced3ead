"""Factory Boy definitions for comments, tweets, likes and subscriptions."""

from __future__ import annotations

import factory
from vidshare.models import Comment, Like, Subscription, Tweet

from tests.factories import BaseFactory
from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    class Params:
        video = factory.SubFactory(VideoFactory)

    video_id = factory.SelfAttribute("video.id")
    owner = factory.SubFactory(UserFactory)
    content = factory.Faker("sentence")


class TweetFactory(BaseFactory):
    class Meta:
        model = Tweet

    owner = factory.SubFactory(UserFactory)
    content = factory.Faker("sentence")


class VideoLikeFactory(BaseFactory):
    """Like on a video; comment and tweet likes go through the service."""

    class Meta:
        model = Like

    class Params:
        liked_by = factory.SubFactory(UserFactory)
        video = factory.SubFactory(VideoFactory)

    liked_by_id = factory.SelfAttribute("liked_by.id")
    video_id = factory.SelfAttribute("video.id")


class SubscriptionFactory(BaseFactory):
    class Meta:
        model = Subscription

    subscriber = factory.SubFactory(UserFactory)
    channel = factory.SubFactory(UserFactory)
