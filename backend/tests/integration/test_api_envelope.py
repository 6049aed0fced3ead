"""Cross-cutting HTTP behavior: envelopes, auth gate, routing errors."""

from __future__ import annotations

from datetime import timedelta

from vidshare.core.extensions import db
from vidshare.infra.jwt.flask_jwt_token_provider import JWTTokenProvider

from tests.factories.user import UserFactory
from tests.helpers.assertions import assert_failure, assert_json_keys, assert_success
from tests.helpers.http import API, bearer


def test_healthcheck(client):
    resp = client.get(f"{API}/healthcheck")
    data = assert_success(resp)
    assert data["status"] == "OK"
    assert data["db"] == "ok"
    assert resp.get_json()["message"] == "Server is running smoothly"
    assert resp.headers["X-Request-ID"]


def test_success_envelope_shape(client):
    body = client.get(f"{API}/healthcheck").get_json()
    assert_json_keys(body, {"statusCode", "data", "message", "success"})
    assert body["statusCode"] == 200
    assert body["success"] is True


def test_unknown_route(client):
    body = assert_failure(client.get(f"{API}/nope"), 404)
    assert body["message"] == f"Route '{API}/nope' not found"
    assert body["error"] == []


def test_wrong_method(client):
    assert_failure(client.delete(f"{API}/healthcheck"), 405)


def test_missing_token(client):
    body = assert_failure(client.get(f"{API}/users/current-user"), 401)
    assert body["message"] == "Unauthorized request"


def test_garbage_token(client):
    body = assert_failure(client.get(f"{API}/users/current-user", headers=bearer("x.y.z")), 401)
    assert body["message"] == "Invalid access token"


def test_expired_token(client):
    user = UserFactory()
    token = JWTTokenProvider().create_access_token(
        identity=user.id, expires_delta=timedelta(seconds=-5)
    )
    assert_failure(client.get(f"{API}/users/current-user", headers=bearer(token)), 401)


def test_refresh_token_is_not_accepted_as_access(client):
    user = UserFactory()
    token = JWTTokenProvider().create_refresh_token(identity=user.id)
    assert_failure(client.get(f"{API}/users/current-user", headers=bearer(token)), 401)


def test_token_for_deleted_user(client, auth_headers):
    user = UserFactory()
    headers = auth_headers(user)
    db.session.delete(user)
    db.session.commit()
    body = assert_failure(client.get(f"{API}/users/current-user", headers=headers), 401)
    assert body["message"] == "Invalid access token"


def test_valid_token(client, auth_headers):
    user = UserFactory(username="ana")
    data = assert_success(client.get(f"{API}/users/current-user", headers=auth_headers(user)))
    assert data["username"] == "ana"
    assert "refreshToken" not in data


def test_validation_error_lists_fields(client, auth_headers):
    resp = client.post(
        f"{API}/tweets", json={"content": ""}, headers=auth_headers(UserFactory())
    )
    body = assert_failure(resp, 400)
    assert body["error"]
    assert all(isinstance(line, str) for line in body["error"])


def test_cookie_wins_over_header(cookie_client):
    user = UserFactory()
    good = JWTTokenProvider().create_access_token(identity=user.id)

    me = f"{API}/users/current-user"
    cookie_client.set_cookie("accessToken", "x.y.z")
    body = assert_failure(cookie_client.get(me, headers=bearer(good)), 401)
    assert body["message"] == "Invalid access token"

    cookie_client.set_cookie("accessToken", good)
    resp = cookie_client.get(me, headers=bearer("x.y.z"))
    assert assert_success(resp)["id"] == user.id
