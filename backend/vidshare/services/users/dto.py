from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpdateAccountIn:
    """
    Partial account update; ``None`` or blank keeps the stored value.

    :param full_name: New display name.
    :type full_name: str | None
    :param email: New login email.
    :type email: str | None
    """

    full_name: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    Public channel page.

    :param id: Channel (user) id.
    :param username: Public handle.
    :param full_name: Display name.
    :param email: Contact email.
    :param avatar: Avatar URL.
    :param cover_image: Banner URL, if any.
    :param subscribers_count: Number of subscribers.
    :param channels_subscribed_to_count: Number of channels this user follows.
    :param is_subscribed: Whether the caller follows this channel.
    """

    id: str
    username: str
    full_name: str
    email: str
    avatar: str
    cover_image: str | None
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool
