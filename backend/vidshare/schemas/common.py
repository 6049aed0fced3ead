"""Common Marshmallow fields and schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

# Keeps OFFSET = (page - 1) * limit well inside a 64-bit integer
MAX_PAGE = 1_000_000


class TrimmedString(fields.String):
    """String field that strips surrounding whitespace on load."""

    def _deserialize(self, value: Any, attr: str | None, data: Any, **kwargs: Any) -> str:
        return super()._deserialize(value, attr, data, **kwargs).strip()


class RequestSchema(Schema):
    """Base for request payloads: unknown keys are dropped, not rejected."""

    class Meta:
        unknown = EXCLUDE


class PaginationQuerySchema(RequestSchema):
    """Validate ``page``/``limit`` query parameters with configurable defaults."""

    def __init__(self, *, default_limit: int = 10, max_limit: int = 100, **kwargs: Any) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        super().__init__(**kwargs)

    page = fields.Integer(load_default=1, validate=validate.Range(min=1, max=MAX_PAGE))
    limit = fields.Integer(validate=validate.Range(min=1))

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        limit = data.get("limit", self._default_limit)
        data["limit"] = min(max(limit, 1), self._max_limit)
        data.setdefault("page", 1)
        return data


class ContentSchema(RequestSchema):
    """Body carrying a single text ``content`` (comments, tweets)."""

    content = TrimmedString(required=True, validate=validate.Length(min=1, max=5000))


class OwnerSchema(Schema):
    """Public channel summary embedded in other payloads."""

    id = fields.String(required=True)
    username = fields.String(required=True)
    fullName = fields.String(attribute="full_name")
    avatar = fields.String()


def build_page(*, items: list[Any], total: int, page: int, limit: int) -> dict[str, Any]:
    """Return the ``data`` mapping for paginated responses."""

    return {"items": items, "total": int(total), "page": int(page), "limit": int(limit)}
