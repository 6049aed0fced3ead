"""Model → DTO converters shared by several services."""

from __future__ import annotations

from vidshare.models.user import User
from vidshare.models.video import Video
from vidshare.services._shared.dto import OwnerOut, UserOut, VideoOut


def to_owner_out(user: User) -> OwnerOut:
    return OwnerOut(
        id=user.id,
        username=user.username,
        full_name=user.full_name,
        avatar=user.avatar,
    )


def to_user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        avatar=user.avatar,
        cover_image=user.cover_image,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def to_video_out(video: Video) -> VideoOut:
    return VideoOut(
        id=video.id,
        owner=to_owner_out(video.owner),
        video_file=video.video_file,
        thumbnail=video.thumbnail,
        title=video.title,
        description=video.description,
        duration=float(video.duration),
        views=int(video.views),
        is_published=bool(video.is_published),
        created_at=video.created_at,
        updated_at=video.updated_at,
    )
