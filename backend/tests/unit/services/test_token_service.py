"""TokenService backed by flask-jwt-extended: claims, secrets and expiry."""

from __future__ import annotations

from datetime import timedelta

import jwt as pyjwt
import pytest
from freezegun import freeze_time
from vidshare.api.deps import build_token_service
from vidshare.services._shared.errors import InvalidTokenError
from vidshare.services.auth.tokens import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE

from tests.factories.user import UserFactory


@pytest.fixture()
def tokens(app):
    return build_token_service()


@pytest.fixture()
def user(session):
    return UserFactory(username="ana", email="a@x.com", full_name="Ana")


def test_access_token_round_trip(tokens, user):
    claims = tokens.verify(tokens.issue_access_token(user))
    assert claims["sub"] == user.id
    assert claims["type"] == ACCESS_TOKEN_TYPE
    assert claims["email"] == "a@x.com"
    assert claims["username"] == "ana"
    assert claims["fullName"] == "Ana"


def test_refresh_token_carries_only_subject(tokens, user):
    claims = tokens.verify(tokens.issue_refresh_token(user), REFRESH_TOKEN_TYPE)
    assert claims["sub"] == user.id
    assert "email" not in claims
    assert "username" not in claims


def test_access_and_refresh_use_distinct_secrets(app, tokens, user):
    access = tokens.issue_access_token(user)
    refresh = tokens.issue_refresh_token(user)

    assert pyjwt.decode(access, "test-access-secret", algorithms=["HS256"])["sub"] == user.id
    assert pyjwt.decode(refresh, "test-refresh-secret", algorithms=["HS256"])["sub"] == user.id
    with pytest.raises(pyjwt.InvalidSignatureError):
        pyjwt.decode(access, "test-refresh-secret", algorithms=["HS256"])
    with pytest.raises(pyjwt.InvalidSignatureError):
        pyjwt.decode(refresh, "test-access-secret", algorithms=["HS256"])


def test_wrong_type_rejected(tokens, user):
    with pytest.raises(InvalidTokenError):
        tokens.verify(tokens.issue_refresh_token(user), ACCESS_TOKEN_TYPE)
    with pytest.raises(InvalidTokenError):
        tokens.verify(tokens.issue_access_token(user), REFRESH_TOKEN_TYPE)


@pytest.mark.parametrize("token", [None, "", "not-a-jwt", "a.b.c"])
def test_malformed_tokens_rejected(tokens, token):
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_tampered_signature_rejected(tokens, user):
    token = tokens.issue_access_token(user)
    forged = pyjwt.encode(
        pyjwt.decode(token, options={"verify_signature": False}),
        "some-other-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        tokens.verify(forged)


def test_access_token_expires_after_configured_lifetime(tokens, user):
    user_id = user.id
    with freeze_time("2026-01-01 12:00:00") as frozen:
        token = tokens.issue_access_token(user)
        frozen.tick(timedelta(minutes=14))
        assert tokens.verify(token)["sub"] == user_id

        frozen.tick(timedelta(minutes=2))
        with pytest.raises(InvalidTokenError, match="expired"):
            tokens.verify(token)


def test_default_lifetimes(app):
    assert app.config["ACCESS_TOKEN_EXPIRES"] == timedelta(minutes=15)
    assert app.config["REFRESH_TOKEN_EXPIRES"] == timedelta(days=7)
