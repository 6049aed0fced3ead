"""Video resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from vidshare.schemas.common import OwnerSchema, PaginationQuerySchema, RequestSchema, TrimmedString


class VideoListQuerySchema(PaginationQuerySchema):
    """Query string for ``GET /videos``."""

    query = TrimmedString(load_default=None)
    sortBy = fields.String(
        load_default=None,
        attribute="sort_by",
        validate=validate.OneOf(["createdAt", "views", "duration", "title"]),
    )
    sortType = fields.String(
        load_default=None, attribute="sort_type", validate=validate.OneOf(["asc", "desc"])
    )
    userId = fields.String(load_default=None, attribute="user_id")


class VideoPublishSchema(RequestSchema):
    """Multipart form fields for publishing a video."""

    title = TrimmedString(required=True, validate=validate.Length(min=1, max=200))
    description = TrimmedString(load_default="")
    duration = fields.Float(load_default=None, validate=validate.Range(min=0))


class VideoUpdateSchema(RequestSchema):
    """Partial update form fields; the thumbnail travels as a file."""

    title = TrimmedString(load_default=None, validate=validate.Length(max=200))
    description = TrimmedString(load_default=None)


class VideoSchema(Schema):
    """Public representation of a video."""

    id = fields.String(required=True)
    owner = fields.Nested(OwnerSchema)
    videoFile = fields.String(attribute="video_file")
    thumbnail = fields.String()
    title = fields.String()
    description = fields.String()
    duration = fields.Float()
    views = fields.Integer()
    isPublished = fields.Boolean(attribute="is_published")
    createdAt = fields.DateTime(attribute="created_at")
    updatedAt = fields.DateTime(attribute="updated_at")
