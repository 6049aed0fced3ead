# comments in English; reST docstrings strict
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PageOut(Generic[T]):
    """
    Paginated output contract.

    :param items: Items in the current page.
    :type items: Sequence[T]
    :param total: Total rows available.
    :type total: int
    :param page: Current page (1-based).
    :type page: int
    :param limit: Page size.
    :type limit: int
    """

    items: Sequence[T]
    total: int
    page: int
    limit: int


@dataclass(frozen=True, slots=True)
class OwnerOut:
    """
    Public summary of a channel embedded in other payloads.

    :param id: User id.
    :type id: str
    :param username: Public handle.
    :type username: str
    :param full_name: Display name.
    :type full_name: str
    :param avatar: Avatar URL.
    :type avatar: str
    """

    id: str
    username: str
    full_name: str
    avatar: str


@dataclass(frozen=True, slots=True)
class UserOut:
    """
    Public user representation (never carries credentials).

    :param id: User id.
    :param username: Public handle.
    :param email: Login email.
    :param full_name: Display name.
    :param avatar: Avatar URL.
    :param cover_image: Cover image URL, if any.
    :param created_at: Creation timestamp.
    :param updated_at: Last update timestamp.
    """

    id: str
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class VideoOut:
    """
    Video representation with its owner summary.

    :param id: Video id.
    :param owner: Owning channel.
    :param video_file: Media URL.
    :param thumbnail: Thumbnail URL.
    :param title: Title.
    :param description: Description.
    :param duration: Length in seconds.
    :param views: View counter.
    :param is_published: Visibility flag.
    :param created_at: Creation timestamp.
    :param updated_at: Last update timestamp.
    """

    id: str
    owner: OwnerOut
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    updated_at: datetime
