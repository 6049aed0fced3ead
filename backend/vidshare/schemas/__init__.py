"""Marshmallow schemas for request validation and response serialization."""

from vidshare.schemas.common import (
    ContentSchema,
    OwnerSchema,
    PaginationQuerySchema,
    TrimmedString,
    build_page,
)
from vidshare.schemas.social import (
    ChannelStatsSchema,
    CommentSchema,
    LikeToggleSchema,
    SubscriptionToggleSchema,
    TweetSchema,
)
from vidshare.schemas.user import (
    ChangePasswordSchema,
    ChannelProfileSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
    UpdateAccountSchema,
    UserSchema,
)
from vidshare.schemas.video import (
    VideoListQuerySchema,
    VideoPublishSchema,
    VideoSchema,
    VideoUpdateSchema,
)

__all__ = [
    "ChangePasswordSchema",
    "ChannelProfileSchema",
    "ChannelStatsSchema",
    "CommentSchema",
    "ContentSchema",
    "LikeToggleSchema",
    "LoginResponseSchema",
    "LoginSchema",
    "OwnerSchema",
    "PaginationQuerySchema",
    "RefreshSchema",
    "RegisterSchema",
    "SubscriptionToggleSchema",
    "TokenPairSchema",
    "TrimmedString",
    "TweetSchema",
    "UpdateAccountSchema",
    "UserSchema",
    "VideoListQuerySchema",
    "VideoPublishSchema",
    "VideoSchema",
    "VideoUpdateSchema",
    "build_page",
]
