"""HTTP helper utilities for tests."""

from __future__ import annotations

from urllib.parse import urlencode

from tests.helpers.utils import upload

API = "/api/v1"


def build_url(path: str, **query: str | int | float | None) -> str:
    """Build an API URL with encoded query parameters."""

    qs = urlencode({k: v for k, v in query.items() if v is not None})
    return f"{API}{path}?{qs}" if qs else f"{API}{path}"


def register(client, *, with_avatar: bool = True, **overrides):
    """POST a multipart registration; ``overrides`` replace form fields."""

    data = {
        "fullName": "Ana",
        "email": "a@x.com",
        "username": "ana",
        "password": "p1",
    }
    if with_avatar:
        data["avatar"] = upload("avatar.png")
    data.update(overrides)
    return client.post(f"{API}/users/register", data=data, content_type="multipart/form-data")


def login(client, password: str = "p1", **identifier):
    body = {"password": password, **(identifier or {"email": "a@x.com"})}
    return client.post(f"{API}/users/login", json=body)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
