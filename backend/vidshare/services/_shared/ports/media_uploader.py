from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class UploadResult:
    """
    Outcome of a successful object-store upload.

    :param url: Public (https) URL of the stored asset.
    :type url: str
    :param public_id: Store-side identifier, used to delete the asset later.
    :type public_id: str
    :param resource_type: ``"image"``, ``"video"`` or ``"raw"``.
    :type resource_type: str
    :param duration: Media length in seconds (videos only).
    :type duration: float | None
    """

    url: str
    public_id: str
    resource_type: str = "image"
    duration: float | None = None


class MediaUploader(Protocol):
    """Port for pushing a local file to the object store.

    Implementations return ``None`` when the upload fails and always remove
    ``local_path`` before returning.
    """

    def upload(self, local_path: str) -> UploadResult | None: ...


@dataclass
class StubMediaUploader(MediaUploader):
    """In-memory uploader for tests; records uploads and can be told to fail."""

    fail: bool = False
    base_url: str = "https://media.test/"
    duration: float = 12.5
    uploads: list[str] = field(default_factory=list)

    def upload(self, local_path: str) -> UploadResult | None:
        name = os.path.basename(local_path)
        try:
            if self.fail:
                return None
            self.uploads.append(name)
            is_video = name.lower().endswith((".mp4", ".mov", ".webm", ".mkv"))
            return UploadResult(
                url=f"{self.base_url}{name}",
                public_id=f"stub/{len(self.uploads)}",
                resource_type="video" if is_video else "image",
                duration=self.duration if is_video else None,
            )
        finally:
            if os.path.exists(local_path):
                os.remove(local_path)
