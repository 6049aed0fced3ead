"""User model: channel identity and credential store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from vidshare.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .video import Video
    from .watch_history import WatchHistoryEntry


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account that owns a channel and holds login credentials.

    Fields
    ------
    username : str
        Public handle. Stored normalized (lowercase, trimmed). Unique.
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    full_name : str
        Display name (trimmed).
    password_hash : str
        Salted hash (write-only setter via ``password``).
    avatar : str
        Object-store URL of the avatar image.
    cover_image : str | None
        Object-store URL of the channel banner.
    refresh_token : str | None
        The single refresh token currently accepted for this user.
    """

    __tablename__ = "users"

    # Columns
    username: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    avatar: Mapped[str] = mapped_column(String(512), nullable=False)
    cover_image: Mapped[str | None] = mapped_column(String(512), nullable=True)
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    videos: Mapped[list[Video]] = relationship(
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    watch_history: Mapped[list[WatchHistoryEntry]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WatchHistoryEntry.watched_at.desc()",
    )

    # Constraints & indexes
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
    )

    # Credentials
    @property
    def password(self) -> Any:
        raise AttributeError("User.password cannot be read; use verify_password().")

    @password.setter
    def password(self, raw: str) -> None:
        # Assigning is the only place a hash is produced
        if not raw or not isinstance(raw, str):
            raise ValueError("A password is required.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """Check ``raw`` against the stored salted hash."""
        if not isinstance(raw, str) or not self.password_hash:
            return False
        return check_password_hash(self.password_hash, raw)

    # Normalization
    @staticmethod
    def _clean(value: Any, label: str, *, lower: bool = False) -> str:
        cleaned = value.strip() if isinstance(value, str) else ""
        if not cleaned:
            raise ValueError(f"{label} must not be blank.")
        return cleaned.lower() if lower else cleaned

    @validates("email")
    def _validate_email(self, _key: str, value: Any) -> str:
        email = self._clean(value, "Email", lower=True)
        local, _, domain = email.partition("@")
        if not local or not domain:
            raise ValueError(f"Not an email address: {email!r}")
        return email

    @validates("username")
    def _validate_username(self, _key: str, value: Any) -> str:
        return self._clean(value, "Username", lower=True)

    @validates("full_name")
    def _validate_full_name(self, _key: str, value: Any) -> str:
        return self._clean(value, "Full name")
