"""Pytest fixtures: one isolated app and in-memory database per test.

Every test gets a fresh application built with :class:`TestingConfig`, a
pushed application context and a schema created from the models. Factories
commit through the same scoped session the services use, so rows are
visible to read-only units of work (which always roll back).
"""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest
from vidshare.api.deps import build_token_service
from vidshare.core.config import TestingConfig
from vidshare.core.extensions import MEDIA_UPLOADER_KEY
from vidshare.core.extensions import db as _db
from vidshare.factory import create_app
from vidshare.services._shared.ports.media_uploader import StubMediaUploader


@pytest.fixture()
def app(tmp_path):
    """Create a Flask application configured for testing.

    The media uploader is replaced by :class:`StubMediaUploader` and staged
    uploads go to a per-test temporary directory.
    """
    os.environ.pop("DATABASE_URL", None)
    application = create_app(TestingConfig, instance_overrides=None)
    application.config["UPLOAD_TMP_DIR"] = str(tmp_path / "uploads")
    application.extensions[MEDIA_UPLOADER_KEY] = StubMediaUploader()

    ctx = application.app_context()
    ctx.push()
    _db.create_all()
    try:
        yield application
    finally:
        _db.session.remove()
        _db.drop_all()
        ctx.pop()


@pytest.fixture()
def db(app):
    """Database extension bound to the testing application."""
    return _db


@pytest.fixture()
def session(db):
    """Scoped session shared by factories, services and request handlers."""
    return db.session


@pytest.fixture()
def media(app) -> StubMediaUploader:
    """The stub uploader installed on the testing app."""
    return app.extensions[MEDIA_UPLOADER_KEY]


@pytest.fixture()
def client(app):
    """Test client that does not keep cookies between requests."""
    return app.test_client(use_cookies=False)


@pytest.fixture()
def cookie_client(app):
    """Test client with a cookie jar, for cookie-based auth flows."""
    return app.test_client()


@pytest.fixture()
def auth_headers(app) -> Callable[..., dict[str, str]]:
    """Return a callable building a Bearer header for a persisted user."""

    def _headers(user) -> dict[str, str]:
        token = build_token_service().issue_access_token(user)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture(scope="session", autouse=True)
def _deterministic_fakes():
    """Same fake names and sequences on every run."""
    import factory.random

    factory.random.reseed_random("vidshare")


@pytest.fixture(autouse=True)
def _bind_factories(session):
    """Factories persist through the same session the services use."""
    from tests.factories import bind_session

    bind_session(session)
    yield
    bind_session(None)


@pytest.fixture()
def make_file(tmp_path) -> Callable[..., str]:
    """Write a throwaway local file and return its path (as uploads expect)."""

    def _make(name: str, payload: bytes = b"data") -> str:
        path = tmp_path / name
        path.write_bytes(payload)
        return str(path)

    return _make
