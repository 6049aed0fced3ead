"""Comment repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select
from sqlalchemy.orm import joinedload

from vidshare.models.comment import Comment
from vidshare.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Persistence-only repository for :class:`Comment`."""

    model = Comment

    def _sortable_fields(self):
        return {"created_at": Comment.created_at}

    def _filterable_fields(self):
        return {"video_id": Comment.video_id, "owner_id": Comment.owner_id}

    def _updatable_fields(self):
        return {"content"}

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.options(joinedload(Comment.owner))
