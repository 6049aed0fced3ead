"""Channel dashboard: statistics and the channel's own video list."""

from __future__ import annotations

from vidshare.services._shared.base import BaseService
from vidshare.services._shared.converters import to_video_out
from vidshare.services._shared.dto import PageOut, VideoOut
from vidshare.services._shared.errors import NotFoundError
from vidshare.services.dashboard.dto import ChannelStatsOut


class DashboardService(BaseService):
    """Read-only aggregates for a channel (the caller's own by default)."""

    def _resolve_channel(self, channel_id: str | None) -> str:
        if channel_id is None:
            return self.require_actor()
        return self.ensure_valid_id(channel_id, "channel")

    def channel_stats(self, channel_id: str | None = None) -> ChannelStatsOut:
        """
        Count videos, subscribers, views and likes for a channel.

        :raises NotFoundError: If the channel does not exist.
        """
        channel_id = self._resolve_channel(channel_id)
        with self.ro_uow() as uow:
            if uow.users.get(channel_id) is None:
                raise NotFoundError("Channel", channel_id)
            total_videos, total_views = uow.videos.channel_totals(channel_id)
            return ChannelStatsOut(
                channel_id=channel_id,
                total_videos=total_videos,
                total_subscribers=uow.subscriptions.count(channel_id=channel_id),
                total_views=total_views,
                total_likes=uow.videos.channel_like_total(channel_id),
            )

    def channel_videos(
        self, channel_id: str | None = None, *, page: int = 1, limit: int = 10
    ) -> PageOut[VideoOut]:
        """
        Page through a channel's videos, newest first. Unpublished videos are
        included only when the caller owns the channel.

        :raises NotFoundError: If the channel does not exist.
        """
        channel_id = self._resolve_channel(channel_id)
        pagination = self.ensure_pagination(page=page, limit=limit, sort=["-created_at"])
        with self.ro_uow() as uow:
            if uow.users.get(channel_id) is None:
                raise NotFoundError("Channel", channel_id)
            result = uow.videos.search(
                pagination,
                owner_id=channel_id,
                include_unpublished=channel_id == self.ctx.actor_id,
            )
            return PageOut(
                items=[to_video_out(v) for v in result.items],
                total=result.total,
                page=result.page,
                limit=result.limit,
            )
