"""VideoService: publishing, visibility, view counting and owner checks."""

from __future__ import annotations

import pytest
from vidshare.models import Video
from vidshare.models.watch_history import WatchHistoryEntry
from vidshare.services._shared.base import ServiceContext
from vidshare.services._shared.errors import (
    AuthorizationError,
    MediaUploadError,
    NotFoundError,
    ServiceError,
)
from vidshare.services._shared.ports.media_uploader import StubMediaUploader
from vidshare.services.videos.dto import VideoListIn, VideoPublishIn, VideoUpdateIn
from vidshare.services.videos.service import VideoService

from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory

MISSING_ID = "0" * 32


@pytest.fixture()
def uploader() -> StubMediaUploader:
    return StubMediaUploader()


@pytest.fixture()
def owner(session):
    return UserFactory()


@pytest.fixture()
def stranger(session):
    return UserFactory()


@pytest.fixture()
def as_user(app, uploader):
    def _build(user=None) -> VideoService:
        actor_id = user.id if user is not None else None
        return VideoService(media=uploader, ctx=ServiceContext(actor_id=actor_id))

    return _build


class TestPublish:
    def test_uploads_media_and_uses_reported_duration(self, as_user, owner, make_file):
        out = as_user(owner).publish(
            VideoPublishIn(
                title="  My clip ",
                description="desc",
                video_path=make_file("clip.mp4"),
                thumbnail_path=make_file("thumb.png"),
                duration=99.0,
            )
        )
        assert out.title == "My clip"
        assert out.duration == 12.5
        assert out.owner.id == owner.id
        assert out.views == 0
        assert out.is_published is True
        assert out.video_file.endswith(".mp4")

    def test_falls_back_to_declared_duration(self, as_user, uploader, owner, make_file):
        out = as_user(owner).publish(
            VideoPublishIn(
                title="Audio-less",
                video_path=make_file("clip.bin"),
                thumbnail_path=make_file("thumb.png"),
                duration=7.0,
            )
        )
        assert out.duration == 7.0

    def test_video_file_required(self, as_user, owner, make_file):
        with pytest.raises(ServiceError, match="Video file is required"):
            as_user(owner).publish(
                VideoPublishIn(title="x", thumbnail_path=make_file("thumb.png"))
            )

    def test_failed_upload_names_asset(self, as_user, uploader, owner, session, make_file):
        uploader.fail = True
        with pytest.raises(MediaUploadError, match="video file"):
            as_user(owner).publish(
                VideoPublishIn(
                    title="x",
                    video_path=make_file("clip.mp4"),
                    thumbnail_path=make_file("thumb.png"),
                )
            )
        assert session.query(Video).count() == 0

    def test_requires_actor(self, as_user, make_file):
        with pytest.raises(AuthorizationError):
            as_user().publish(VideoPublishIn(title="x", video_path=make_file("clip.mp4")))


class TestReads:
    def test_get_counts_view_and_records_history(self, as_user, stranger, session):
        video = VideoFactory(views=3)
        updated_at = video.updated_at

        out = as_user(stranger).get_video(video.id)

        assert out.views == 4
        session.expire_all()
        assert session.get(Video, video.id).updated_at == updated_at
        entry = session.query(WatchHistoryEntry).filter_by(user_id=stranger.id).one()
        assert entry.video_id == video.id

    def test_unpublished_hidden_from_others(self, as_user, owner, stranger):
        video = VideoFactory(owner=owner, is_published=False)
        with pytest.raises(NotFoundError):
            as_user(stranger).get_video(video.id)
        assert as_user(owner).get_video(video.id).id == video.id

    def test_malformed_id(self, as_user, stranger):
        with pytest.raises(ServiceError, match="Invalid video ID"):
            as_user(stranger).get_video("not-an-id")

    def test_list_filters_by_query_and_visibility(self, as_user, owner, stranger):
        VideoFactory(owner=owner, title="Cooking pasta", description="")
        VideoFactory(owner=owner, title="Draft pasta", description="", is_published=False)
        VideoFactory(owner=stranger, title="Cycling", description="")

        public = as_user(stranger).list_videos(VideoListIn(query="PASTA"))
        assert [v.title for v in public.items] == ["Cooking pasta"]
        assert public.total == 1

        own = as_user(owner).list_videos(VideoListIn(user_id=owner.id, query="pasta"))
        assert own.total == 2

        seen_by_other = as_user(stranger).list_videos(VideoListIn(user_id=owner.id))
        assert seen_by_other.total == 1

    def test_list_sorts_by_views(self, as_user, stranger):
        VideoFactory(views=5, title="five")
        VideoFactory(views=50, title="fifty")
        VideoFactory(views=1, title="one")

        page = as_user(stranger).list_videos(VideoListIn(sort_by="views", sort_type="asc"))
        assert [v.title for v in page.items] == ["one", "five", "fifty"]

        page = as_user(stranger).list_videos(VideoListIn(sort_by="views", limit=2))
        assert [v.title for v in page.items] == ["fifty", "five"]
        assert page.total == 3


class TestOwnerOnlyCommands:
    def test_non_owner_gets_403_on_every_mutation(self, as_user, owner, stranger):
        video = VideoFactory(owner=owner)
        service = as_user(stranger)

        with pytest.raises(AuthorizationError):
            service.update_video(video.id, VideoUpdateIn(title="hijack"))
        with pytest.raises(AuthorizationError):
            service.update_video(video.id, VideoUpdateIn())
        with pytest.raises(AuthorizationError):
            service.toggle_publish(video.id)
        with pytest.raises(AuthorizationError):
            service.delete_video(video.id)

    def test_ensure_editable(self, as_user, owner, stranger):
        video = VideoFactory(owner=owner)

        as_user(owner).ensure_editable(video.id)
        with pytest.raises(AuthorizationError):
            as_user(stranger).ensure_editable(video.id)
        with pytest.raises(NotFoundError):
            as_user(owner).ensure_editable(MISSING_ID)
        with pytest.raises(ServiceError, match="Invalid video ID"):
            as_user(owner).ensure_editable("nope")

    def test_partial_update_keeps_blank_fields(self, as_user, owner, make_file):
        video = VideoFactory(owner=owner, title="Old", description="Keep me")
        out = as_user(owner).update_video(
            video.id,
            VideoUpdateIn(title="New", description="   ", thumbnail_path=make_file("t.png")),
        )
        assert out.title == "New"
        assert out.description == "Keep me"
        assert out.thumbnail.startswith("https://media.test/")

    def test_toggle_publish_flips(self, as_user, owner):
        video = VideoFactory(owner=owner)
        assert as_user(owner).toggle_publish(video.id).is_published is False
        assert as_user(owner).toggle_publish(video.id).is_published is True

    def test_delete_missing_is_404_every_time(self, as_user, owner, session):
        VideoFactory(owner=owner)
        for _ in range(2):
            with pytest.raises(NotFoundError):
                as_user(owner).delete_video(MISSING_ID)
        assert session.query(Video).count() == 1

    def test_delete(self, as_user, owner, session):
        video = VideoFactory(owner=owner)
        as_user(owner).delete_video(video.id)
        assert session.query(Video).count() == 0
