"""Comment endpoints."""

from __future__ import annotations

from flask import Blueprint

from vidshare.api.deps import (
    current_context,
    parse_pagination,
    request_payload,
    require_auth,
    respond,
    timing,
)
from vidshare.schemas import CommentSchema, ContentSchema, build_page
from vidshare.services.comments.service import CommentService

bp = Blueprint("comments", __name__)

content_schema = ContentSchema()
comment_schema = CommentSchema()
comment_list_schema = CommentSchema(many=True)


def _service() -> CommentService:
    return CommentService(ctx=current_context().service_context())


@bp.get("/<video_id>")
@require_auth
@timing
def list_comments(video_id: str):
    """Return a video's comments, newest first."""

    pagination = parse_pagination()
    page = _service().list_comments(video_id, **pagination)
    data = build_page(
        items=comment_list_schema.dump(page.items),
        total=page.total,
        page=page.page,
        limit=page.limit,
    )
    return respond(data, "Comments fetched successfully")


@bp.post("/<video_id>")
@require_auth
@timing
def add_comment(video_id: str):
    data = content_schema.load(request_payload())
    comment = _service().add_comment(video_id, data["content"])
    return respond(comment_schema.dump(comment), "Comment added successfully", status=201)


@bp.patch("/c/<comment_id>")
@require_auth
@timing
def update_comment(comment_id: str):
    service = _service()
    service.ensure_editable(comment_id)
    data = content_schema.load(request_payload())
    comment = service.update_comment(comment_id, data["content"])
    return respond(comment_schema.dump(comment), "Comment updated successfully")


@bp.delete("/c/<comment_id>")
@require_auth
@timing
def delete_comment(comment_id: str):
    _service().delete_comment(comment_id)
    return respond({}, "Comment deleted successfully")
