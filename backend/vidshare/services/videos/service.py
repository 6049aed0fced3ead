"""
VideoService
============

Publishing, listing, viewing and owner-only mutation of videos.

Notes
-----
- Media files are uploaded before the row is written; a failed upload aborts
  with :class:`MediaUploadError` and nothing is persisted.
- Unpublished videos are invisible (404) to everyone but their owner.
"""

from __future__ import annotations

import logging

from vidshare.repositories.video import VideoRepository
from vidshare.services._shared.base import BaseService, ServiceContext
from vidshare.services._shared.converters import to_video_out
from vidshare.services._shared.dto import PageOut, VideoOut
from vidshare.services._shared.errors import MediaUploadError, NotFoundError, ServiceError
from vidshare.services._shared.ports.media_uploader import MediaUploader
from vidshare.services.videos.dto import VideoListIn, VideoPublishIn, VideoUpdateIn

logger = logging.getLogger(__name__)

# Public sortBy → repository sort key
SORT_FIELDS = {
    "createdAt": "created_at",
    "created_at": "created_at",
    "views": "views",
    "duration": "duration",
    "title": "title",
}


def _sort_tokens(sort_by: str | None, sort_type: str | None) -> list[str]:
    field = SORT_FIELDS.get(sort_by or "", "created_at")
    ascending = (sort_type or "desc").lower() == "asc"
    return [field if ascending else f"-{field}"]


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class VideoService(BaseService):
    """Application service for the ``Video`` aggregate."""

    def __init__(
        self,
        *,
        media: MediaUploader | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.media = media

    def _upload(self, local_path: str | None, label: str):
        if not local_path:
            raise ServiceError(f"{label.capitalize()} is required")
        if self.media is None:
            raise RuntimeError("VideoService requires a media uploader for uploads.")
        uploaded = self.media.upload(local_path)
        if uploaded is None:
            raise MediaUploadError(label)
        return uploaded

    # --------------------------------------------------------------------- #
    # Reads
    # --------------------------------------------------------------------- #

    def list_videos(self, dto: VideoListIn) -> PageOut[VideoOut]:
        """
        Page through published videos (plus the caller's own unpublished ones
        when listing their own channel).

        :raises ServiceError: If ``user_id`` is malformed.
        """
        owner_id = None
        if dto.user_id:
            owner_id = self.ensure_valid_id(dto.user_id, "user")
        pagination = self.ensure_pagination(
            page=dto.page, limit=dto.limit, sort=_sort_tokens(dto.sort_by, dto.sort_type)
        )
        include_unpublished = owner_id is not None and owner_id == self.ctx.actor_id

        with self.ro_uow() as uow:
            repo: VideoRepository = uow.videos
            page = repo.search(
                pagination,
                query=_blank_to_none(dto.query),
                owner_id=owner_id,
                include_unpublished=include_unpublished,
            )
            return PageOut(
                items=[to_video_out(v) for v in page.items],
                total=page.total,
                page=page.page,
                limit=page.limit,
            )

    def get_video(self, video_id: str) -> VideoOut:
        """
        Fetch one video, count the view and record it in the caller's history.

        :raises ServiceError: If the id is malformed.
        :raises NotFoundError: If missing, or unpublished and not the caller's.
        """
        video_id = self.ensure_valid_id(video_id, "video")
        with self.rw_uow() as uow:
            repo: VideoRepository = uow.videos
            video = self.visible_video(uow, video_id)
            repo.increment_views(video)
            if self.ctx.actor_id:
                uow.users.record_watch(self.ctx.actor_id, video.id)
            return to_video_out(video)

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def publish(self, dto: VideoPublishIn) -> VideoOut:
        """
        Upload media and create a published video owned by the caller.

        :raises ServiceError: If the title or a file is missing.
        :raises MediaUploadError: If an upload fails.
        """
        actor_id = self.require_actor()
        title = _blank_to_none(dto.title)
        if title is None:
            raise ServiceError("Title is required")

        video_file = self._upload(dto.video_path, "video file")
        thumbnail = self._upload(dto.thumbnail_path, "thumbnail")
        duration = video_file.duration if video_file.duration is not None else dto.duration

        with self.rw_uow() as uow:
            repo: VideoRepository = uow.videos
            video = repo.add(
                repo.model(
                    owner_id=actor_id,
                    video_file=video_file.url,
                    thumbnail=thumbnail.url,
                    title=title,
                    description=(dto.description or "").strip(),
                    duration=float(duration or 0.0),
                    is_published=True,
                )
            )
            video = repo.get(video.id)
            logger.info("Video published", extra={"video_id": video.id, "owner_id": actor_id})
            return to_video_out(video)

    def ensure_editable(self, video_id: str) -> None:
        """
        Check id format, existence and ownership without changing anything.

        Handlers call this before validating the request body, so a caller who
        does not own the video gets 403 whatever they sent.

        :raises NotFoundError: If the video does not exist.
        :raises AuthorizationError: If the caller is not the owner.
        """
        video_id = self.ensure_valid_id(video_id, "video")
        with self.ro_uow() as uow:
            video = uow.videos.get(video_id)
            if video is None:
                raise NotFoundError("Video", video_id)
            self.ensure_owner(
                self.ctx.actor_id, video.owner_id, msg="You can only edit your own videos"
            )

    def update_video(self, video_id: str, dto: VideoUpdateIn) -> VideoOut:
        """
        Change title, description and/or thumbnail of an owned video.

        :raises NotFoundError: If the video does not exist.
        :raises AuthorizationError: If the caller is not the owner.
        :raises MediaUploadError: If the replacement thumbnail fails to upload.
        """
        video_id = self.ensure_valid_id(video_id, "video")
        with self.rw_uow() as uow:
            repo: VideoRepository = uow.videos
            video = repo.get(video_id)
            if video is None:
                raise NotFoundError("Video", video_id)
            self.ensure_owner(
                self.ctx.actor_id, video.owner_id, msg="You can only edit your own videos"
            )

            changes: dict[str, str] = {}
            if (title := _blank_to_none(dto.title)) is not None:
                changes["title"] = title
            if (description := _blank_to_none(dto.description)) is not None:
                changes["description"] = description
            if dto.thumbnail_path:
                changes["thumbnail"] = self._upload(dto.thumbnail_path, "thumbnail").url

            repo.assign_updates(video, changes)
            logger.info("Video updated", extra={"video_id": video.id, "fields": sorted(changes)})
            return to_video_out(video)

    def delete_video(self, video_id: str) -> None:
        """
        Delete an owned video; comments, likes and history go with it.

        :raises NotFoundError: If the video does not exist.
        :raises AuthorizationError: If the caller is not the owner.
        """
        video_id = self.ensure_valid_id(video_id, "video")
        with self.rw_uow() as uow:
            repo: VideoRepository = uow.videos
            video = repo.get(video_id)
            if video is None:
                raise NotFoundError("Video", video_id)
            self.ensure_owner(
                self.ctx.actor_id, video.owner_id, msg="You can only delete your own videos"
            )
            repo.delete(video)
            logger.info("Video deleted", extra={"video_id": video_id})

    def toggle_publish(self, video_id: str) -> VideoOut:
        """
        Flip the published flag of an owned video.

        :raises NotFoundError: If the video does not exist.
        :raises AuthorizationError: If the caller is not the owner.
        """
        video_id = self.ensure_valid_id(video_id, "video")
        with self.rw_uow() as uow:
            repo: VideoRepository = uow.videos
            video = repo.get(video_id)
            if video is None:
                raise NotFoundError("Video", video_id)
            self.ensure_owner(
                self.ctx.actor_id, video.owner_id, msg="You can only publish your own videos"
            )
            repo.update(video, is_published=not video.is_published)
            logger.info(
                "Video publish state toggled",
                extra={"video_id": video.id, "is_published": video.is_published},
            )
            return to_video_out(video)
