"""factory_boy base bound to the session of the running test."""

from __future__ import annotations

import factory
from sqlalchemy.orm import Session

_current: Session | None = None


def bind_session(session: Session | None) -> None:
    """Point every factory at ``session`` (``None`` unbinds)."""
    global _current
    _current = session


def current_session() -> Session:
    if _current is None:
        raise RuntimeError("No session bound; request the 'session' fixture in this test.")
    return _current


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Commit each created object.

    Read-only units of work roll back when they exit, which would discard
    rows that were merely flushed.
    """

    class Meta:
        abstract = True
        sqlalchemy_session_factory = current_session
        sqlalchemy_session_persistence = "commit"
