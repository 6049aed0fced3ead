"""Like toggle endpoints."""

from __future__ import annotations

from flask import Blueprint

from vidshare.api.deps import current_context, require_auth, respond, timing
from vidshare.schemas import LikeToggleSchema, VideoSchema
from vidshare.services.likes.dto import LikeToggleOut
from vidshare.services.likes.service import LikeService

bp = Blueprint("likes", __name__)

toggle_schema = LikeToggleSchema()
video_list_schema = VideoSchema(many=True)


def _service() -> LikeService:
    return LikeService(ctx=current_context().service_context())


def _toggled(out: LikeToggleOut):
    # 201 when a like row was created, 200 when one was removed
    if out.liked:
        return respond(toggle_schema.dump(out), "Liked successfully", status=201)
    return respond(toggle_schema.dump(out), "Like removed successfully")


@bp.post("/toggle/v/<video_id>")
@require_auth
@timing
def toggle_video_like(video_id: str):
    return _toggled(_service().toggle_video_like(video_id))


@bp.post("/toggle/c/<comment_id>")
@require_auth
@timing
def toggle_comment_like(comment_id: str):
    return _toggled(_service().toggle_comment_like(comment_id))


@bp.post("/toggle/t/<tweet_id>")
@require_auth
@timing
def toggle_tweet_like(tweet_id: str):
    return _toggled(_service().toggle_tweet_like(tweet_id))


@bp.get("/videos")
@require_auth
@timing
def liked_videos():
    videos = _service().liked_videos()
    return respond(video_list_schema.dump(videos), "Liked videos fetched successfully")
