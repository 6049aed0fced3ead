"""
vidshare.services._shared.ports
===============================

Ports (hexagonal interfaces) that keep the service layer independent from
token signing and object storage. Concrete adapters live under
``vidshare.infra``.

Modules
-------
- :mod:`token_provider`: :class:`~.TokenProvider` for JWT creation and decoding.
- :mod:`media_uploader`: :class:`~.MediaUploader` and :class:`~.UploadResult`
  for object-store uploads.
"""

from __future__ import annotations

from .media_uploader import MediaUploader, StubMediaUploader, UploadResult
from .token_provider import StubTokenProvider, TokenProvider

__all__ = [
    "MediaUploader",
    "StubMediaUploader",
    "StubTokenProvider",
    "TokenProvider",
    "UploadResult",
]
