"""Units of work over Flask-SQLAlchemy's request-scoped session."""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import Session

from vidshare.core.extensions import db
from vidshare.repositories import (
    CommentRepository,
    LikeRepository,
    SubscriptionRepository,
    TweetRepository,
    UserRepository,
    VideoRepository,
)
from vidshare.uow.base import UnitOfWork


class _SessionBound(UnitOfWork):
    """Wire every repository to ``db.session`` so they share one transaction."""

    def __init__(self) -> None:
        session: Session = db.session
        self.session = session
        self.users = UserRepository(session)
        self.videos = VideoRepository(session)
        self.comments = CommentRepository(session)
        self.likes = LikeRepository(session)
        self.subscriptions = SubscriptionRepository(session)
        self.tweets = TweetRepository(session)

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyUnitOfWork(_SessionBound):
    """
    Commit when the ``with`` block finishes cleanly, roll back otherwise.

    A failing commit is rolled back too and its error re-raised.
    """

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()


class SQLAlchemyReadOnlyUnitOfWork(_SessionBound):
    """
    Query-only scope: flushing pending changes raises and nothing is committed.

    The session is always rolled back on exit, which also discards any
    ``UPDATE`` a repository issued directly.
    """

    read_only = True

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        event.listen(self.session, "before_flush", _refuse_flush)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            if event.contains(self.session, "before_flush", _refuse_flush):
                event.remove(self.session, "before_flush", _refuse_flush)

    def commit(self) -> None:
        raise RuntimeError("commit() called on a read-only unit of work.")


def _refuse_flush(session: Session, _context: Any, _instances: Any) -> None:
    pending = len(session.new) + len(session.dirty) + len(session.deleted)
    if pending:
        raise RuntimeError(f"ORM flush blocked in read-only unit of work ({pending} pending).")
