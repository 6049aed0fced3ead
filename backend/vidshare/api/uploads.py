"""Stage multipart uploads on local disk before they go to the object store."""

from __future__ import annotations

import contextlib
import logging
import os
import uuid
from collections.abc import Iterator
from pathlib import Path

from flask import current_app, request
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)


def _stash(field: str, tmp_dir: Path) -> str | None:
    storage = request.files.get(field)
    if storage is None or not storage.filename:
        return None
    suffix = Path(secure_filename(storage.filename)).suffix.lower()
    target = tmp_dir / f"{uuid.uuid4().hex}{suffix}"
    storage.save(target)
    return str(target)


@contextlib.contextmanager
def staged_files(*fields: str) -> Iterator[dict[str, str | None]]:
    """
    Save the named request files to ``UPLOAD_TMP_DIR``.

    Yields a mapping ``field -> local path`` (``None`` when the field was not
    sent). The uploader removes files it consumes; anything left behind
    (e.g. when the handler failed before uploading) is removed on exit.
    """
    tmp_dir = Path(current_app.config["UPLOAD_TMP_DIR"])
    tmp_dir.mkdir(parents=True, exist_ok=True)
    paths: dict[str, str | None] = {}
    try:
        for name in fields:
            paths[name] = _stash(name, tmp_dir)
        yield paths
    finally:
        for path in paths.values():
            if path and os.path.exists(path):
                try:
                    os.remove(path)
                except OSError:
                    logger.warning("Could not remove staged upload", extra={"path": path})
