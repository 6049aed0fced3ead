from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SubscriptionToggleOut:
    """
    Result of a subscription toggle.

    :param channel_id: Channel subscribed to (or unsubscribed from).
    :type channel_id: str
    :param subscribed: State after the toggle.
    :type subscribed: bool
    """

    channel_id: str
    subscribed: bool
