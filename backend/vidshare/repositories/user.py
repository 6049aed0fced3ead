"""User repository: lookups, credential state and watch history."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select, update
from sqlalchemy.orm import defer, joinedload

from vidshare.models.base import utcnow
from vidshare.models.user import User
from vidshare.models.video import Video
from vidshare.models.watch_history import WatchHistoryEntry
from vidshare.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never issues tokens; it only stores and compares the refresh token
    value the token service hands it.
    """

    model = User

    # ---------------------------- Whitelists ----------------------------

    def _sortable_fields(self):
        return {
            "username": User.username,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {
            "id": User.id,
            "email": User.email,
            "username": User.username,
        }

    def _updatable_fields(self):
        """Profile fields; password and refresh token have dedicated paths."""
        return {"email", "full_name", "avatar", "cover_image"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive)."""
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by username (case-insensitive)."""
        stmt = select(User).where(User.username == username.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_by_login(self, *, email: str | None, username: str | None) -> User | None:
        """Fetch the user matching either the email or the username.

        :param email: Candidate email, may be ``None``.
        :type email: str | None
        :param username: Candidate username, may be ``None``.
        :type username: str | None
        :returns: First matching user, or ``None``.
        :rtype: User | None
        """
        clauses = []
        if email:
            clauses.append(User.email == email.lower().strip())
        if username:
            clauses.append(User.username == username.lower().strip())
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email_or_username(self, *, email: str, username: str) -> bool:
        stmt = select(User.id).where(
            or_(
                User.email == email.lower().strip(),
                User.username == username.lower().strip(),
            )
        )
        return self.session.execute(stmt.limit(1)).first() is not None

    def get_public(self, user_id: str) -> User | None:
        """Fetch a user by id with credential columns deferred.

        Used by the authentication gate so the password hash and refresh token
        are never loaded for ordinary requests.
        """
        stmt = (
            select(User)
            .where(User.id == user_id)
            .options(defer(User.password_hash), defer(User.refresh_token))
        )
        return cast(User | None, self.session.execute(stmt).scalars().first())

    # ---------------------------- Refresh token ----------------------------

    def set_refresh_token(self, user_id: str, token: str | None) -> None:
        """Overwrite the stored refresh token (``None`` clears it)."""
        self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=token, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )

    def swap_refresh_token(self, user_id: str, *, expected: str, replacement: str) -> bool:
        """Atomically replace the refresh token only if it still equals ``expected``.

        Two concurrent refreshes presenting the same token race on this single
        conditional ``UPDATE``; exactly one of them sees ``rowcount == 1``.

        :returns: ``True`` when the swap happened.
        :rtype: bool
        """
        result = self.session.execute(
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=replacement, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return bool(result.rowcount)

    # ---------------------------- Watch history ----------------------------

    def record_watch(self, user_id: str, video_id: str) -> None:
        """Insert or bump the (user, video) history entry to now."""
        entry = self.session.execute(
            select(WatchHistoryEntry).where(
                WatchHistoryEntry.user_id == user_id,
                WatchHistoryEntry.video_id == video_id,
            )
        ).scalar_one_or_none()
        if entry is None:
            self.session.add(WatchHistoryEntry(user_id=user_id, video_id=video_id))
        else:
            entry.watched_at = utcnow()
        self.flush()

    def watch_history(self, user_id: str) -> list[Video]:
        """Return watched videos, most recently watched first."""
        stmt = (
            select(Video)
            .join(WatchHistoryEntry, WatchHistoryEntry.video_id == Video.id)
            .where(WatchHistoryEntry.user_id == user_id)
            .options(joinedload(Video.owner))
            .order_by(WatchHistoryEntry.watched_at.desc(), WatchHistoryEntry.id.asc())
        )
        return list(self.session.execute(stmt).scalars().unique().all())

