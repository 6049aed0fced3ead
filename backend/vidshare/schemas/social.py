"""Comment, tweet, like, subscription and dashboard schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from vidshare.schemas.common import OwnerSchema


class CommentSchema(Schema):
    id = fields.String(required=True)
    videoId = fields.String(attribute="video_id")
    owner = fields.Nested(OwnerSchema)
    content = fields.String()
    createdAt = fields.DateTime(attribute="created_at")
    updatedAt = fields.DateTime(attribute="updated_at")


class TweetSchema(Schema):
    id = fields.String(required=True)
    owner = fields.Nested(OwnerSchema)
    content = fields.String()
    createdAt = fields.DateTime(attribute="created_at")
    updatedAt = fields.DateTime(attribute="updated_at")


class LikeToggleSchema(Schema):
    targetType = fields.String(attribute="target_type")
    targetId = fields.String(attribute="target_id")
    liked = fields.Boolean()


class SubscriptionToggleSchema(Schema):
    channelId = fields.String(attribute="channel_id")
    subscribed = fields.Boolean()


class ChannelStatsSchema(Schema):
    channelId = fields.String(attribute="channel_id")
    totalVideos = fields.Integer(attribute="total_videos")
    totalSubscribers = fields.Integer(attribute="total_subscribers")
    totalViews = fields.Integer(attribute="total_views")
    totalLikes = fields.Integer(attribute="total_likes")
