"""vidshare: video sharing backend (channels, videos, comments, likes, tweets)."""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
