"""Small builders shared by the HTTP tests."""

from __future__ import annotations

import io


def upload(name: str, payload: bytes = b"binary") -> tuple[io.BytesIO, str]:
    """A ``(stream, filename)`` pair, the shape the test client sends as a file part."""
    return io.BytesIO(payload), name
