from vidshare.models.comment import Comment
from vidshare.models.like import Like
from vidshare.models.subscription import Subscription
from vidshare.models.tweet import Tweet
from vidshare.models.user import User
from vidshare.models.video import Video
from vidshare.models.watch_history import WatchHistoryEntry

__all__ = [
    "Comment",
    "Like",
    "Subscription",
    "Tweet",
    "User",
    "Video",
    "WatchHistoryEntry",
]
