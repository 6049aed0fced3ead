"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from vidshare.models.comment import Comment
from vidshare.models.like import Like
from vidshare.models.subscription import Subscription
from vidshare.models.tweet import Tweet
from vidshare.models.user import User
from vidshare.models.video import Video

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

MEDIA_BASE = "https://res.cloudinary.com/demo"

USER_FIXTURES: list[dict[str, str]] = [
    {
        "username": "lena",
        "email": "lena.park@example.com",
        "full_name": "Lena Park",
        "password": "devPass123!",
    },
    {
        "username": "omar",
        "email": "omar.haddad@example.com",
        "full_name": "Omar Haddad",
        "password": "cutsAndClips9",
    },
    {
        "username": "tess",
        "email": "tess.moreau@example.com",
        "full_name": "Tess Moreau",
        "password": "framesPerSec24",
    },
]

VIDEO_FIXTURES: list[dict[str, Any]] = [
    {
        "owner": "lena",
        "title": "Street food in Busan",
        "description": "Night market walk-through.",
        "duration": 612.0,
        "views": 1804,
    },
    {
        "owner": "lena",
        "title": "Editing color grades fast",
        "description": "Three LUT tricks.",
        "duration": 455.5,
        "views": 320,
    },
    {
        "owner": "omar",
        "title": "Desk setup 2026",
        "description": "",
        "duration": 298.0,
        "views": 75,
    },
    {
        "owner": "tess",
        "title": "Draft: studio tour",
        "description": "Not ready yet.",
        "duration": 130.0,
        "views": 0,
        "is_published": False,
    },
]

COMMENT_FIXTURES: list[dict[str, str]] = [
    {"video": "Street food in Busan", "owner": "omar", "content": "Now I am hungry."},
    {"video": "Street food in Busan", "owner": "tess", "content": "Which market was this?"},
    {"video": "Desk setup 2026", "owner": "lena", "content": "Link to the lamp?"},
]

TWEET_FIXTURES: list[dict[str, str]] = [
    {"owner": "lena", "content": "New upload every Friday."},
    {"owner": "omar", "content": "Working on a cable management video."},
]

SUBSCRIPTION_FIXTURES: list[tuple[str, str]] = [
    ("omar", "lena"),
    ("tess", "lena"),
    ("lena", "omar"),
]

VIDEO_LIKE_FIXTURES: list[tuple[str, str]] = [
    ("omar", "Street food in Busan"),
    ("tess", "Street food in Busan"),
    ("lena", "Desk setup 2026"),
]


def _session(database: SQLAlchemy) -> Session:
    """Return the scoped session bound to ``database``."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Increment the created/existing counter for ``table``."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    entry["created" if created else "existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalar_one_or_none()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    session.flush()
    return instance, True


def seed_users(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create the demo channels."""
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    for fixture in USER_FIXTURES:
        username = fixture["username"]
        _, created = _get_or_create(
            session,
            User,
            username=username,
            defaults={
                "email": fixture["email"],
                "full_name": fixture["full_name"],
                "avatar": f"{MEDIA_BASE}/image/upload/avatars/{username}.png",
                "password": fixture["password"],
            },
        )
        _touch(summary, "users", created)
        if verbose:
            LOGGER.debug("user %s %s", username, "created" if created else "exists")
    session.commit()
    return summary


def seed_content(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create videos, comments and tweets for the demo channels."""
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    users = {u.username: u for u in session.scalars(select(User))}
    videos: dict[str, Video] = {}

    for fixture in VIDEO_FIXTURES:
        owner = users[fixture["owner"]]
        slug = fixture["title"].lower().replace(" ", "-").replace(":", "")
        video, created = _get_or_create(
            session,
            Video,
            owner_id=owner.id,
            title=fixture["title"],
            defaults={
                "video_file": f"{MEDIA_BASE}/video/upload/{slug}.mp4",
                "thumbnail": f"{MEDIA_BASE}/image/upload/{slug}.jpg",
                "description": fixture["description"],
                "duration": fixture["duration"],
                "views": fixture["views"],
                "is_published": fixture.get("is_published", True),
            },
        )
        videos[video.title] = video
        _touch(summary, "videos", created)

    for fixture in COMMENT_FIXTURES:
        _, created = _get_or_create(
            session,
            Comment,
            video_id=videos[fixture["video"]].id,
            owner_id=users[fixture["owner"]].id,
            content=fixture["content"],
        )
        _touch(summary, "comments", created)

    for fixture in TWEET_FIXTURES:
        _, created = _get_or_create(
            session, Tweet, owner_id=users[fixture["owner"]].id, content=fixture["content"]
        )
        _touch(summary, "tweets", created)

    if verbose:
        LOGGER.debug("content seeded: %s", summary)
    session.commit()
    return summary


def seed_engagement(
    database: SQLAlchemy, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create subscriptions and video likes between the demo channels."""
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    users = {u.username: u for u in session.scalars(select(User))}
    videos = {v.title: v for v in session.scalars(select(Video))}

    for subscriber, channel in SUBSCRIPTION_FIXTURES:
        _, created = _get_or_create(
            session,
            Subscription,
            subscriber_id=users[subscriber].id,
            channel_id=users[channel].id,
        )
        _touch(summary, "subscriptions", created)

    for liker, title in VIDEO_LIKE_FIXTURES:
        _, created = _get_or_create(
            session, Like, liked_by_id=users[liker].id, video_id=videos[title].id
        )
        _touch(summary, "likes", created)

    if verbose:
        LOGGER.debug("engagement seeded: %s", summary)
    session.commit()
    return summary


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run all seeders in the correct foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    combined: dict[str, dict[str, int]] = {}
    for func in (seed_users, seed_content, seed_engagement):
        result = func(database, verbose=verbose)
        for table, counters in result.items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = ["seed_users", "seed_content", "seed_engagement", "run_all"]
