"""Tweet repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select
from sqlalchemy.orm import joinedload

from vidshare.models.tweet import Tweet
from vidshare.repositories.base import BaseRepository


class TweetRepository(BaseRepository[Tweet]):
    """Persistence-only repository for :class:`Tweet`."""

    model = Tweet

    def _sortable_fields(self):
        return {"created_at": Tweet.created_at}

    def _filterable_fields(self):
        return {"owner_id": Tweet.owner_id}

    def _updatable_fields(self):
        return {"content"}

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.options(joinedload(Tweet.owner))
