"""Integration tests for /users endpoints."""

from __future__ import annotations

import os

import pytest

from tests.factories.social import SubscriptionFactory
from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory
from tests.helpers.assertions import assert_failure, assert_json_keys, assert_success
from tests.helpers.http import API, bearer, login, register
from tests.helpers.utils import upload


class TestRegister:
    def test_duplicate_is_409(self, client):
        assert_success(register(client), 201)
        body = assert_failure(register(client, email="other@x.com"), 409)
        assert body["message"] == "User with email or username already exists"

    def test_avatar_required(self, client):
        body = assert_failure(register(client, with_avatar=False), 400)
        assert body["message"] == "Avatar file is required"

    def test_missing_fields(self, client):
        resp = client.post(
            f"{API}/users/register",
            data={"email": "bad"},
            content_type="multipart/form-data",
        )
        body = assert_failure(resp, 400)
        assert body["message"] == "Validation failed"
        assert any(line.startswith("password:") for line in body["error"])

    def test_upload_failure_is_500_and_cleans_up(self, app, client, media):
        media.fail = True
        body = assert_failure(register(client, coverImage=upload("cover.png")), 500)
        assert body["message"] == "Error while uploading avatar"
        assert os.listdir(app.config["UPLOAD_TMP_DIR"]) == []


class TestLogin:
    def test_login_by_username_sets_cookies(self, client):
        register(client)
        resp = login(client, username="ana")
        data = assert_success(resp)
        assert_json_keys(data, {"user", "accessToken", "refreshToken"})
        cookies = resp.headers.getlist("Set-Cookie")
        assert any(c.startswith("accessToken=") and "HttpOnly" in c for c in cookies)
        assert any(c.startswith("refreshToken=") and "HttpOnly" in c for c in cookies)

    def test_unknown_user_is_404(self, client):
        assert_failure(login(client, email="ghost@x.com"), 404)

    def test_identifier_required(self, client):
        body = assert_failure(client.post(f"{API}/users/login", json={"password": "x"}), 400)
        assert "Username or email is required" in body["error"][0]


class TestCookieSession:
    def test_cookie_auth_refresh_and_logout(self, cookie_client):
        register(cookie_client)
        assert_success(login(cookie_client))

        me = assert_success(cookie_client.get(f"{API}/users/current-user"))
        assert me["username"] == "ana"

        # Refresh token read from the cookie
        assert_success(cookie_client.post(f"{API}/users/refresh-token"))

        logout = cookie_client.post(f"{API}/users/logout")
        assert_success(logout)
        assert any(c.startswith("accessToken=;") for c in logout.headers.getlist("Set-Cookie"))
        assert_failure(cookie_client.get(f"{API}/users/current-user"), 401)


class TestAccount:
    def test_change_password(self, client):
        register(client)
        token = assert_success(login(client))["accessToken"]

        resp = client.post(
            f"{API}/users/change-password",
            json={"oldPassword": "p1", "newPassword": "p2"},
            headers=bearer(token),
        )
        assert_success(resp)
        assert_failure(login(client, password="p1"), 401)
        assert_success(login(client, password="p2"))

    def test_wrong_old_password(self, client, auth_headers):
        user = UserFactory(password="right")
        resp = client.post(
            f"{API}/users/change-password",
            json={"oldPassword": "wrong", "newPassword": "p2"},
            headers=auth_headers(user),
        )
        assert_failure(resp, 401)

    def test_update_account_keeps_blank_fields(self, client, auth_headers):
        user = UserFactory(full_name="Ana", email="a@x.com")
        resp = client.patch(
            f"{API}/users/update-account",
            json={"fullName": "Ana B", "email": ""},
            headers=auth_headers(user),
        )
        data = assert_success(resp)
        assert data["fullName"] == "Ana B"
        assert data["email"] == "a@x.com"

    @pytest.mark.parametrize(
        "body",
        [{"email": "a@"}, {"email": "@x.com"}, {"email": "a b@x.com"}, {"fullName": "x" * 101}],
    )
    def test_update_account_rejects_malformed_fields(self, client, auth_headers, body):
        user = UserFactory(full_name="Ana", email="a@x.com")
        resp = client.patch(f"{API}/users/update-account", json=body, headers=auth_headers(user))
        [field] = body
        assert assert_failure(resp, 400)["message"].startswith(f"{field}: ")

    def test_update_avatar(self, client, auth_headers):
        user = UserFactory()
        resp = client.patch(
            f"{API}/users/avatar",
            data={"avatar": upload("fresh.png")},
            content_type="multipart/form-data",
            headers=auth_headers(user),
        )
        assert assert_success(resp)["avatar"].startswith("https://media.test/")

    def test_update_cover_image_requires_file(self, client, auth_headers):
        resp = client.patch(
            f"{API}/users/cover-image",
            data={},
            content_type="multipart/form-data",
            headers=auth_headers(UserFactory()),
        )
        assert_failure(resp, 400)


class TestChannel:
    def test_channel_profile(self, client, auth_headers):
        channel = UserFactory(username="chan")
        viewer = UserFactory()
        SubscriptionFactory(subscriber=viewer, channel=channel)

        data = assert_success(client.get(f"{API}/users/c/chan", headers=auth_headers(viewer)))

        assert data["subscribersCount"] == 1
        assert data["channelsSubscribedToCount"] == 0
        assert data["isSubscribed"] is True

    def test_unknown_channel(self, client, auth_headers):
        resp = client.get(f"{API}/users/c/nobody", headers=auth_headers(UserFactory()))
        assert_failure(resp, 404)

    def test_watch_history(self, client, auth_headers):
        viewer = UserFactory()
        video = VideoFactory()
        headers = auth_headers(viewer)
        assert_success(client.get(f"{API}/videos/{video.id}", headers=headers))

        history = assert_success(client.get(f"{API}/users/history", headers=headers))
        assert [v["id"] for v in history] == [video.id]
