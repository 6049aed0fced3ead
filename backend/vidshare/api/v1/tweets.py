"""Tweet endpoints."""

from __future__ import annotations

from flask import Blueprint

from vidshare.api.deps import current_context, request_payload, require_auth, respond, timing
from vidshare.schemas import ContentSchema, TweetSchema
from vidshare.services.tweets.service import TweetService

bp = Blueprint("tweets", __name__)

content_schema = ContentSchema()
tweet_schema = TweetSchema()
tweet_list_schema = TweetSchema(many=True)


def _service() -> TweetService:
    return TweetService(ctx=current_context().service_context())


@bp.post("")
@require_auth
@timing
def create_tweet():
    data = content_schema.load(request_payload())
    tweet = _service().create_tweet(data["content"])
    return respond(tweet_schema.dump(tweet), "Tweet created successfully", status=201)


@bp.get("/user/<user_id>")
@require_auth
@timing
def user_tweets(user_id: str):
    tweets = _service().user_tweets(user_id)
    return respond(tweet_list_schema.dump(tweets), "Tweets fetched successfully")


@bp.patch("/<tweet_id>")
@require_auth
@timing
def update_tweet(tweet_id: str):
    service = _service()
    service.ensure_editable(tweet_id)
    data = content_schema.load(request_payload())
    tweet = service.update_tweet(tweet_id, data["content"])
    return respond(tweet_schema.dump(tweet), "Tweet updated successfully")


@bp.delete("/<tweet_id>")
@require_auth
@timing
def delete_tweet(tweet_id: str):
    _service().delete_tweet(tweet_id)
    return respond({}, "Tweet deleted successfully")
