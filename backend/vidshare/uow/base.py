"""
Unit of Work contract shared by the read-write and read-only implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vidshare.repositories import (
        CommentRepository,
        LikeRepository,
        SubscriptionRepository,
        TweetRepository,
        UserRepository,
        VideoRepository,
    )


class UnitOfWork(ABC):
    """
    Transaction boundary for one service call.

    All repositories hang off the same session, so a ``with`` block sees its
    own writes. Leaving the block is implementation-specific: the read-write
    variant commits unless an exception escaped, the read-only variant always
    rolls back.
    """

    users: UserRepository
    videos: VideoRepository
    comments: CommentRepository
    likes: LikeRepository
    subscriptions: SubscriptionRepository
    tweets: TweetRepository

    #: ``True`` when flushes are blocked for the lifetime of the block.
    read_only: bool = False

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
