"""Channel subscription endpoints."""

from __future__ import annotations

from flask import Blueprint

from vidshare.api.deps import current_context, require_auth, respond, timing
from vidshare.schemas import OwnerSchema, SubscriptionToggleSchema
from vidshare.services.subscriptions.service import SubscriptionService

bp = Blueprint("subscriptions", __name__)

toggle_schema = SubscriptionToggleSchema()
channel_list_schema = OwnerSchema(many=True)


def _service() -> SubscriptionService:
    return SubscriptionService(ctx=current_context().service_context())


@bp.post("/c/<channel_id>")
@require_auth
@timing
def toggle_subscription(channel_id: str):
    """Subscribe to or unsubscribe from a channel."""

    out = _service().toggle_subscription(channel_id)
    if out.subscribed:
        return respond(toggle_schema.dump(out), "Subscribed successfully", status=201)
    return respond(toggle_schema.dump(out), "Unsubscribed successfully")


@bp.get("/c/<channel_id>")
@require_auth
@timing
def channel_subscribers(channel_id: str):
    users = _service().channel_subscribers(channel_id)
    return respond(channel_list_schema.dump(users), "Subscribers fetched successfully")


@bp.get("/u/<subscriber_id>")
@require_auth
@timing
def subscribed_channels(subscriber_id: str):
    channels = _service().subscribed_channels(subscriber_id)
    return respond(channel_list_schema.dump(channels), "Subscribed channels fetched successfully")
