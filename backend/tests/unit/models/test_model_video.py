"""Tests for Video defaults and cascading deletes."""

from __future__ import annotations

from sqlalchemy import func, select
from vidshare.models import Comment, Like, Video

from tests.factories.social import CommentFactory, VideoLikeFactory
from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory


def test_defaults(session):
    owner = UserFactory()
    video = Video(
        owner_id=owner.id,
        video_file="https://media.test/v.mp4",
        thumbnail="https://media.test/t.png",
        title="  Hello  ",
        duration=3.0,
    )
    session.add(video)
    session.commit()

    assert video.title == "Hello"
    assert video.views == 0
    assert video.is_published is True
    assert video.description == ""
    assert video.created_at is not None


def test_deleting_video_cascades_to_comments_and_likes(session):
    video = VideoFactory()
    CommentFactory(video=video)
    VideoLikeFactory(video=video)

    session.delete(video)
    session.commit()

    assert session.scalar(select(func.count()).select_from(Comment)) == 0
    assert session.scalar(select(func.count()).select_from(Like)) == 0


def test_owner_relationship(session):
    video = VideoFactory()
    assert video.owner.id == video.owner_id
