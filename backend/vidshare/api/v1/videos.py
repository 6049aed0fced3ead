"""Video endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidshare.api.deps import current_context, media_uploader, require_auth, respond, timing
from vidshare.api.uploads import staged_files
from vidshare.schemas import (
    VideoListQuerySchema,
    VideoPublishSchema,
    VideoSchema,
    VideoUpdateSchema,
    build_page,
)
from vidshare.services.videos.dto import VideoListIn, VideoPublishIn, VideoUpdateIn
from vidshare.services.videos.service import VideoService

bp = Blueprint("videos", __name__)

list_query_schema = VideoListQuerySchema()
publish_schema = VideoPublishSchema()
update_schema = VideoUpdateSchema()
video_schema = VideoSchema()
video_list_schema = VideoSchema(many=True)


def _service(*, with_media: bool = False) -> VideoService:
    return VideoService(
        media=media_uploader() if with_media else None,
        ctx=current_context().service_context(),
    )


@bp.get("")
@require_auth
@timing
def list_videos():
    """Search and page through videos."""

    args = list_query_schema.load(request.args)
    page = _service().list_videos(
        VideoListIn(
            page=args["page"],
            limit=args["limit"],
            query=args["query"],
            sort_by=args["sort_by"],
            sort_type=args["sort_type"],
            user_id=args["user_id"],
        )
    )
    data = build_page(
        items=video_list_schema.dump(page.items),
        total=page.total,
        page=page.page,
        limit=page.limit,
    )
    return respond(data, "Videos fetched successfully")


@bp.post("")
@require_auth
@timing
def publish_video():
    """Upload a video file and thumbnail, then create the video."""

    data = publish_schema.load(request.form.to_dict())
    with staged_files("videoFile", "thumbnail") as files:
        video = _service(with_media=True).publish(
            VideoPublishIn(
                title=data["title"],
                description=data["description"],
                video_path=files["videoFile"],
                thumbnail_path=files["thumbnail"],
                duration=data["duration"],
            )
        )
    return respond(video_schema.dump(video), "Video published successfully", status=201)


@bp.get("/<video_id>")
@require_auth
@timing
def get_video(video_id: str):
    video = _service().get_video(video_id)
    return respond(video_schema.dump(video), "Video fetched successfully")


@bp.patch("/<video_id>")
@require_auth
@timing
def update_video(video_id: str):
    """Owner-only partial update; ownership is checked before the body."""

    _service().ensure_editable(video_id)
    data = update_schema.load(request.form.to_dict() or request.get_json(silent=True) or {})
    with staged_files("thumbnail") as files:
        video = _service(with_media=files["thumbnail"] is not None).update_video(
            video_id,
            VideoUpdateIn(
                title=data["title"],
                description=data["description"],
                thumbnail_path=files["thumbnail"],
            ),
        )
    return respond(video_schema.dump(video), "Video updated successfully")


@bp.delete("/<video_id>")
@require_auth
@timing
def delete_video(video_id: str):
    _service().delete_video(video_id)
    return respond({}, "Video deleted successfully")


@bp.patch("/toggle/publish/<video_id>")
@require_auth
@timing
def toggle_publish(video_id: str):
    video = _service().toggle_publish(video_id)
    return respond(video_schema.dump(video), "Publish status toggled successfully")
