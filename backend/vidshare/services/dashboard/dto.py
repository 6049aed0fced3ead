from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ChannelStatsOut:
    """
    Aggregated channel statistics.

    :param channel_id: Channel the numbers describe.
    :param total_videos: Number of videos (published or not).
    :param total_subscribers: Number of subscribers.
    :param total_views: Sum of views across videos.
    :param total_likes: Likes received by the channel's videos.
    """

    channel_id: str
    total_videos: int
    total_subscribers: int
    total_views: int
    total_likes: int
