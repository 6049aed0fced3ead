# vidshare/services/videos/dto.py
from __future__ import annotations

from dataclasses import dataclass

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class VideoListIn:
    """
    Listing parameters.

    :param page: 1-based page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param query: Text matched against title and description.
    :type query: str | None
    :param sort_by: Public sort field (``createdAt``, ``views``, ``duration``, ``title``).
    :type sort_by: str | None
    :param sort_type: ``"asc"`` or ``"desc"``.
    :type sort_type: str | None
    :param user_id: Restrict to one channel.
    :type user_id: str | None
    """

    page: int = 1
    limit: int = 10
    query: str | None = None
    sort_by: str | None = None
    sort_type: str | None = None
    user_id: str | None = None


@dataclass(frozen=True, slots=True)
class VideoPublishIn:
    """
    Publish parameters.

    :param title: Video title.
    :type title: str
    :param description: Video description.
    :type description: str
    :param video_path: Temporary local path of the media file.
    :type video_path: str | None
    :param thumbnail_path: Temporary local path of the thumbnail.
    :type thumbnail_path: str | None
    :param duration: Client-declared length, used when the store reports none.
    :type duration: float | None
    """

    title: str
    description: str = ""
    video_path: str | None = None
    thumbnail_path: str | None = None
    duration: float | None = None


@dataclass(frozen=True, slots=True)
class VideoUpdateIn:
    """
    Partial update; ``None`` or blank keeps the stored value.

    :param title: New title.
    :type title: str | None
    :param description: New description.
    :type description: str | None
    :param thumbnail_path: Temporary local path of a replacement thumbnail.
    :type thumbnail_path: str | None
    """

    title: str | None = None
    description: str | None = None
    thumbnail_path: str | None = None
