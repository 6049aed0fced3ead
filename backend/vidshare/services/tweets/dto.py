from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vidshare.services._shared.dto import OwnerOut


@dataclass(frozen=True, slots=True)
class TweetOut:
    """
    Tweet with its author summary.

    :param id: Tweet id.
    :param owner: Author.
    :param content: Text.
    :param created_at: Creation timestamp.
    :param updated_at: Last update timestamp.
    """

    id: str
    owner: OwnerOut
    content: str
    created_at: datetime
    updated_at: datetime
