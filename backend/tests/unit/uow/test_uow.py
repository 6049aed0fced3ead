"""Read-write and read-only units of work."""

from __future__ import annotations

import pytest
from vidshare.models.user import User
from vidshare.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from vidshare.uow import SQLAlchemyUnitOfWork as RWuow

from tests.factories.user import UserFactory


class TestSQLAlchemyUnitOfWork:
    def test_commits_on_success(self, session):
        with RWuow() as uow:
            user = UserFactory.build()
            uow.users.add(user)
            user_id = user.id

        session.expunge_all()
        assert session.get(User, user_id) is not None

    def test_rolls_back_on_error(self, session):
        with pytest.raises(RuntimeError, match="boom"):
            with RWuow() as uow:
                uow.users.add(UserFactory.build())
                raise RuntimeError("boom")

        assert session.query(User).count() == 0


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(UserFactory.build())
            uow.session.flush()

    def test_allows_reads(self, session):
        UserFactory()
        with ROuow() as uow:
            assert uow.users.count() == 1

    def test_disallows_commit(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError):
            uow.commit()

    def test_guard_removed_after_exit(self, session):
        with ROuow():
            pass
        with RWuow() as uow:
            uow.users.add(UserFactory.build())
        assert session.query(User).count() == 1


def test_read_only_flag_and_shared_session(session):
    assert RWuow.read_only is False
    assert ROuow.read_only is True
    with RWuow() as uow:
        assert uow.users.session is uow.videos.session is uow.tweets.session
