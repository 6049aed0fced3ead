"""Version 1 routes."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

# Blueprint modules import services, which must not import this package
from .comments import bp as comments_bp  # noqa: E402
from .dashboard import bp as dashboard_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .likes import bp as likes_bp  # noqa: E402
from .subscriptions import bp as subscriptions_bp  # noqa: E402
from .tweets import bp as tweets_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402
from .videos import bp as videos_bp  # noqa: E402

# (blueprint, path below /api/v1)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, "/healthcheck"),
    (users_bp, "/users"),
    (videos_bp, "/videos"),
    (comments_bp, "/comments"),
    (likes_bp, "/likes"),
    (subscriptions_bp, "/subscriptions"),
    (tweets_bp, "/tweets"),
    (dashboard_bp, "/dashboard"),
]
