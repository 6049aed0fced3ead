"""Integration tests for comments, tweets, likes, subscriptions and dashboard."""

from __future__ import annotations

import uuid

from tests.factories.social import CommentFactory, TweetFactory, VideoLikeFactory
from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory
from tests.helpers.assertions import assert_failure, assert_pagination, assert_success
from tests.helpers.http import API, build_url


class TestComments:
    def test_add_and_list(self, client, auth_headers):
        video = VideoFactory()
        headers = auth_headers(UserFactory(username="critic"))

        created = assert_success(
            client.post(
                f"{API}/comments/{video.id}", json={"content": "  nice  "}, headers=headers
            ),
            201,
        )
        assert created["content"] == "nice"
        assert created["videoId"] == video.id
        assert created["owner"]["username"] == "critic"

        resp = client.get(build_url(f"/comments/{video.id}", limit=5), headers=headers)
        data = assert_success(resp)
        assert_pagination(data)
        assert [c["id"] for c in data["items"]] == [created["id"]]

    def test_empty_content_rejected(self, client, auth_headers):
        video = VideoFactory()
        resp = client.post(
            f"{API}/comments/{video.id}", json={"content": ""}, headers=auth_headers(UserFactory())
        )
        assert_failure(resp, 400)

    def test_only_author_edits(self, client, auth_headers):
        comment = CommentFactory()
        stranger = auth_headers(UserFactory())
        assert_failure(
            client.patch(f"{API}/comments/c/{comment.id}", json={"content": "x"}, headers=stranger),
            403,
        )
        assert_failure(client.delete(f"{API}/comments/c/{comment.id}", headers=stranger), 403)

        edited = assert_success(
            client.patch(
                f"{API}/comments/c/{comment.id}",
                json={"content": "edited"},
                headers=auth_headers(comment.owner),
            )
        )
        assert edited["content"] == "edited"

    def test_delete_missing_is_404_every_time(self, client, auth_headers):
        headers = auth_headers(UserFactory())
        missing = uuid.uuid4().hex
        for _ in range(2):
            assert_failure(client.delete(f"{API}/comments/c/{missing}", headers=headers), 404)


class TestTweets:
    def test_crud(self, client, auth_headers):
        author = UserFactory()
        headers = auth_headers(author)

        resp = client.post(f"{API}/tweets", json={"content": "hi"}, headers=headers)
        tweet = assert_success(resp, 201)
        listed = assert_success(client.get(f"{API}/tweets/user/{author.id}", headers=headers))
        assert [t["id"] for t in listed] == [tweet["id"]]

        updated = assert_success(
            client.patch(f"{API}/tweets/{tweet['id']}", json={"content": "bye"}, headers=headers)
        )
        assert updated["content"] == "bye"

        assert_success(client.delete(f"{API}/tweets/{tweet['id']}", headers=headers))
        assert_failure(client.delete(f"{API}/tweets/{tweet['id']}", headers=headers), 404)

    def test_non_author_forbidden(self, client, auth_headers):
        tweet = TweetFactory()
        resp = client.delete(f"{API}/tweets/{tweet.id}", headers=auth_headers(UserFactory()))
        assert_failure(resp, 403)


class TestLikes:
    def test_toggle_comment_and_tweet(self, client, auth_headers):
        headers = auth_headers(UserFactory())
        comment = CommentFactory()
        tweet = TweetFactory()

        for kind, target in (("c", comment.id), ("t", tweet.id)):
            assert_success(client.post(f"{API}/likes/toggle/{kind}/{target}", headers=headers), 201)
            resp = client.post(f"{API}/likes/toggle/{kind}/{target}", headers=headers)
            assert assert_success(resp)["liked"] is False

    def test_missing_target(self, client, auth_headers):
        resp = client.post(
            f"{API}/likes/toggle/v/{uuid.uuid4().hex}", headers=auth_headers(UserFactory())
        )
        assert_failure(resp, 404)

    def test_liked_videos(self, client, auth_headers):
        fan = UserFactory()
        video = VideoFactory()
        VideoLikeFactory(liked_by=fan, video=video)

        data = assert_success(client.get(f"{API}/likes/videos", headers=auth_headers(fan)))
        assert [v["id"] for v in data] == [video.id]


class TestSubscriptions:
    def test_toggle(self, client, auth_headers):
        channel = UserFactory()
        fan = UserFactory()
        headers = auth_headers(fan)

        first = client.post(f"{API}/subscriptions/c/{channel.id}", headers=headers)
        assert assert_success(first, 201)["subscribed"] is True

        resp = client.get(f"{API}/subscriptions/c/{channel.id}", headers=headers)
        subscribers = assert_success(resp)
        assert [s["id"] for s in subscribers] == [fan.id]
        channels = assert_success(client.get(f"{API}/subscriptions/u/{fan.id}", headers=headers))
        assert [c["id"] for c in channels] == [channel.id]

        second = client.post(f"{API}/subscriptions/c/{channel.id}", headers=headers)
        assert assert_success(second, 200)["subscribed"] is False

    def test_self_subscription_rejected(self, client, auth_headers):
        me = UserFactory()
        assert_failure(client.post(f"{API}/subscriptions/c/{me.id}", headers=auth_headers(me)), 400)


class TestDashboard:
    def test_stats_and_videos(self, client, auth_headers):
        owner = UserFactory()
        VideoFactory(owner=owner, views=5)
        VideoFactory(owner=owner, views=2, is_published=False)
        headers = auth_headers(owner)

        stats = assert_success(client.get(f"{API}/dashboard/stats", headers=headers))
        assert stats["channelId"] == owner.id
        assert stats["totalVideos"] == 2
        assert stats["totalViews"] == 7

        videos = assert_success(client.get(f"{API}/dashboard/videos", headers=headers))
        assert_pagination(videos)
        assert videos["total"] == 2

    def test_other_channel_hides_unpublished(self, client, auth_headers):
        owner = UserFactory()
        VideoFactory(owner=owner)
        VideoFactory(owner=owner, is_published=False)

        videos = assert_success(
            client.get(f"{API}/dashboard/videos/{owner.id}", headers=auth_headers(UserFactory()))
        )
        assert videos["total"] == 1


def test_non_author_forbidden_even_with_invalid_body(client, auth_headers):
    comment = CommentFactory()
    tweet = TweetFactory()
    stranger = auth_headers(UserFactory())

    resp = client.patch(f"{API}/comments/c/{comment.id}", json={"content": ""}, headers=stranger)
    assert_failure(resp, 403)
    resp = client.patch(f"{API}/tweets/{tweet.id}", json={}, headers=stranger)
    assert_failure(resp, 403)


def test_unpublished_video_is_out_of_reach_for_others(client, auth_headers):
    owner = UserFactory()
    video = VideoFactory(owner=owner)
    comment = CommentFactory(video=video)
    owner_headers = auth_headers(owner)
    stranger = auth_headers(UserFactory())
    assert_success(client.patch(f"{API}/videos/toggle/publish/{video.id}", headers=owner_headers))

    assert_failure(client.get(f"{API}/videos/{video.id}", headers=stranger), 404)
    assert_failure(client.post(f"{API}/likes/toggle/v/{video.id}", headers=stranger), 404)
    assert_failure(client.post(f"{API}/likes/toggle/c/{comment.id}", headers=stranger), 404)
    resp = client.post(f"{API}/comments/{video.id}", json={"content": "hi"}, headers=stranger)
    assert_failure(resp, 404)
    assert_failure(client.get(f"{API}/comments/{video.id}", headers=stranger), 404)

    assert_success(client.post(f"{API}/likes/toggle/v/{video.id}", headers=owner_headers), 201)
    resp = client.post(f"{API}/comments/{video.id}", json={"content": "hi"}, headers=owner_headers)
    assert_success(resp, 201)
    listed = assert_success(client.get(f"{API}/comments/{video.id}", headers=owner_headers))
    assert listed["total"] == 2


def test_comment_list_rejects_huge_page(client, auth_headers):
    video = VideoFactory()
    resp = client.get(
        build_url(f"/comments/{video.id}", page="999999999999999999999"),
        headers=auth_headers(UserFactory()),
    )
    assert_failure(resp, 400)
