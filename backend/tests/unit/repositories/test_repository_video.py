"""VideoRepository search, counters and channel aggregates."""

from __future__ import annotations

import pytest
from vidshare.repositories.base import Pagination
from vidshare.repositories.video import VideoRepository

from tests.factories.social import VideoLikeFactory
from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory


@pytest.fixture()
def repo(session) -> VideoRepository:
    return VideoRepository(session)


def test_search_paginates_with_stable_order(repo):
    owner = UserFactory()
    for i in range(5):
        VideoFactory(owner=owner, views=i)

    first = repo.search(Pagination(page=1, limit=2, sort=["-views"]), owner_id=owner.id)
    second = repo.search(Pagination(page=2, limit=2, sort=["-views"]), owner_id=owner.id)

    assert first.total == 5
    assert [v.views for v in first.items] == [4, 3]
    assert [v.views for v in second.items] == [2, 1]


def test_unknown_sort_tokens_are_ignored(repo):
    VideoFactory()
    page = repo.search(Pagination(page=1, limit=10, sort=["-password"]))
    assert page.total == 1


def test_increment_views_is_atomic_update(repo, session):
    video = VideoFactory(views=7)
    repo.increment_views(video)
    repo.increment_views(video)
    session.commit()
    assert video.views == 9


def test_channel_aggregates(repo):
    owner = UserFactory()
    a = VideoFactory(owner=owner, views=3)
    VideoFactory(owner=owner, views=4)
    VideoLikeFactory(video=a)

    assert repo.channel_totals(owner.id) == (2, 7)
    assert repo.channel_like_total(owner.id) == 1
    assert repo.channel_totals(UserFactory().id) == (0, 0)


def test_delete_where_requires_filters(repo):
    with pytest.raises(ValueError):
        repo.delete_where()
