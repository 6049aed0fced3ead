"""End-to-end flow: register, login, rotate refresh token, toggle a like."""

from __future__ import annotations

from tests.factories.video import VideoFactory
from tests.helpers.assertions import assert_failure, assert_success
from tests.helpers.http import API, bearer, login, register


def test_register_login_refresh_and_like(client, session):
    # Register ana with an avatar
    resp = register(client)
    user = assert_success(resp, 201)
    assert user["username"] == "ana"
    assert user["email"] == "a@x.com"
    assert user["fullName"] == "Ana"
    for secret in ("password", "passwordHash", "refreshToken"):
        assert secret not in user

    # Wrong password
    assert_failure(login(client, password="wrong"), 401)

    # Correct password
    data = assert_success(login(client))
    assert data["user"]["id"] == user["id"]
    first_refresh = data["refreshToken"]

    # Rotate
    rotated = assert_success(
        client.post(f"{API}/users/refresh-token", json={"refreshToken": first_refresh})
    )
    assert rotated["refreshToken"] != first_refresh

    # Replaying the rotated-away token fails
    resp = client.post(f"{API}/users/refresh-token", json={"refreshToken": first_refresh})
    assert_failure(resp, 401)

    # Toggle-like the same video twice
    video = VideoFactory()
    headers = bearer(rotated["accessToken"])
    first = client.post(f"{API}/likes/toggle/v/{video.id}", headers=headers)
    assert assert_success(first, 201)["liked"] is True
    second = client.post(f"{API}/likes/toggle/v/{video.id}", headers=headers)
    assert assert_success(second, 200)["liked"] is False
