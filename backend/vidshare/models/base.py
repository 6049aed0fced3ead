"""Column mixins: opaque string ids and UTC timestamps."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

ID_LENGTH = 32


def utcnow() -> datetime:
    """Aware ``datetime`` in UTC."""
    return datetime.now(UTC)


def new_id() -> str:
    """32 lowercase hex characters from a random UUID."""
    return uuid4().hex


class TimestampMixin:
    """Provide ``created_at`` and ``updated_at`` timestamp columns.

    Attributes
    ----------
    created_at:
        Timezone-aware insert timestamp (application default, database fallback).
    updated_at:
        Timezone-aware timestamp refreshed on every ORM update.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )


class PKMixin:
    """Expose an opaque string primary key column named ``id``.

    Attributes
    ----------
    id:
        32-character hex identifier generated client-side on insert.
    """

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)


class ReprMixin:
    def __repr__(self) -> str:
        return f"<{type(self).__name__} {getattr(self, 'id', None)}>"
