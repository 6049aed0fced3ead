"""Channel dashboard endpoints."""

from __future__ import annotations

from flask import Blueprint

from vidshare.api.deps import current_context, parse_pagination, require_auth, respond, timing
from vidshare.schemas import ChannelStatsSchema, VideoSchema, build_page
from vidshare.services.dashboard.service import DashboardService

bp = Blueprint("dashboard", __name__)

stats_schema = ChannelStatsSchema()
video_list_schema = VideoSchema(many=True)


def _service() -> DashboardService:
    return DashboardService(ctx=current_context().service_context())


@bp.get("/stats", defaults={"channel_id": None})
@bp.get("/stats/<channel_id>")
@require_auth
@timing
def channel_stats(channel_id: str | None):
    """Totals for a channel (the caller's own when no id is given)."""

    stats = _service().channel_stats(channel_id)
    return respond(stats_schema.dump(stats), "Channel stats fetched successfully")


@bp.get("/videos", defaults={"channel_id": None})
@bp.get("/videos/<channel_id>")
@require_auth
@timing
def channel_videos(channel_id: str | None):
    pagination = parse_pagination()
    page = _service().channel_videos(channel_id, **pagination)
    data = build_page(
        items=video_list_schema.dump(page.items),
        total=page.total,
        page=page.page,
        limit=page.limit,
    )
    return respond(data, "Channel videos fetched successfully")
