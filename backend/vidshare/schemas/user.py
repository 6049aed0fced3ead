"""User and authentication schemas."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from marshmallow import Schema, ValidationError, fields, pre_load, validate, validates_schema

from vidshare.schemas.common import RequestSchema, TrimmedString


class RegisterSchema(RequestSchema):
    """Multipart form fields for registration (files travel separately)."""

    fullName = TrimmedString(
        required=True, attribute="full_name", validate=validate.Length(min=1, max=100)
    )
    email = fields.Email(required=True, validate=validate.Length(max=254))
    username = TrimmedString(required=True, validate=validate.Length(min=1, max=50))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class LoginSchema(RequestSchema):
    """Credentials: password plus email or username."""

    email = TrimmedString(load_default=None)
    username = TrimmedString(load_default=None)
    password = fields.String(required=True, validate=validate.Length(min=1))

    @validates_schema
    def _require_identifier(self, data: dict[str, Any], **_: Any) -> None:
        if not data.get("email") and not data.get("username"):
            raise ValidationError("Username or email is required", field_name="email")


class RefreshSchema(RequestSchema):
    """Optional body fallback when the refresh cookie is absent."""

    refreshToken = fields.String(load_default=None, attribute="refresh_token")


class ChangePasswordSchema(RequestSchema):
    oldPassword = fields.String(required=True, attribute="old_password")
    newPassword = fields.String(
        required=True, attribute="new_password", validate=validate.Length(min=1, max=128)
    )


class UpdateAccountSchema(RequestSchema):
    """Partial account update; blank values count as "not sent"."""

    fullName = TrimmedString(
        load_default=None,
        allow_none=True,
        attribute="full_name",
        validate=validate.Length(min=1, max=100),
    )
    email = fields.Email(load_default=None, allow_none=True, validate=validate.Length(max=254))

    @pre_load
    def _drop_blank(self, data: Any, **_: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        cleaned = {k: v.strip() if isinstance(v, str) else v for k, v in data.items()}
        return {k: v for k, v in cleaned.items() if v != ""}


class UserSchema(Schema):
    """Public representation of a user (no password, no refresh token)."""

    id = fields.String(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    fullName = fields.String(attribute="full_name")
    avatar = fields.String()
    coverImage = fields.String(attribute="cover_image", allow_none=True)
    createdAt = fields.DateTime(attribute="created_at")
    updatedAt = fields.DateTime(attribute="updated_at")


class TokenPairSchema(Schema):
    accessToken = fields.String(attribute="access_token")
    refreshToken = fields.String(attribute="refresh_token")


class LoginResponseSchema(Schema):
    """``{user, accessToken, refreshToken}`` returned by login."""

    user = fields.Nested(UserSchema)
    accessToken = fields.Function(lambda out: out.tokens.access_token)
    refreshToken = fields.Function(lambda out: out.tokens.refresh_token)


class ChannelProfileSchema(Schema):
    id = fields.String()
    username = fields.String()
    fullName = fields.String(attribute="full_name")
    email = fields.String()
    avatar = fields.String()
    coverImage = fields.String(attribute="cover_image", allow_none=True)
    subscribersCount = fields.Integer(attribute="subscribers_count")
    channelsSubscribedToCount = fields.Integer(attribute="channels_subscribed_to_count")
    isSubscribed = fields.Boolean(attribute="is_subscribed")
