"""Cloudinary adapter for the media uploader port."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import cloudinary.exceptions
import cloudinary.uploader

from vidshare.services._shared.ports import MediaUploader, UploadResult

log = logging.getLogger(__name__)


@dataclass(slots=True)
class CloudinaryUploader(MediaUploader):
    """
    Upload files with the Cloudinary SDK.

    Credentials are passed per call, so several apps (or tests) can use
    different accounts in one process. ``resource_type="auto"`` lets
    Cloudinary tell images from videos. The local file is removed whether the
    upload succeeds or not.

    :param cloud_name: Cloudinary cloud name.
    :param api_key: API key of the account.
    :param api_secret: Secret the SDK signs uploads with.
    :param timeout: HTTP timeout in seconds.
    """

    cloud_name: str
    api_key: str
    api_secret: str
    timeout: float = 60.0

    def upload(self, local_path: str) -> UploadResult | None:
        if not local_path:
            return None
        try:
            body = cloudinary.uploader.upload(
                local_path,
                resource_type="auto",
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
                timeout=self.timeout,
            )
            duration = body.get("duration")
            return UploadResult(
                url=body.get("secure_url") or body["url"],
                public_id=body.get("public_id", ""),
                resource_type=body.get("resource_type", "image"),
                duration=float(duration) if duration is not None else None,
            )
        except (cloudinary.exceptions.Error, OSError, ValueError, KeyError):
            log.error(
                "media.upload_failed",
                exc_info=True,
                extra={"file": os.path.basename(local_path)},
            )
            return None
        finally:
            if os.path.exists(local_path):
                os.remove(local_path)
