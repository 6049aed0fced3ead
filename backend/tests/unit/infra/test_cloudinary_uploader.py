"""CloudinaryUploader with the SDK's upload call replaced."""

from __future__ import annotations

import os

import cloudinary.exceptions
import cloudinary.uploader
import pytest
from vidshare.infra.media.cloudinary_uploader import CloudinaryUploader
from vidshare.services._shared.ports import UploadResult


@pytest.fixture()
def uploader() -> CloudinaryUploader:
    return CloudinaryUploader(cloud_name="demo", api_key="key-123", api_secret="shh", timeout=5)


@pytest.fixture()
def sdk_calls(monkeypatch):
    """Record SDK calls; the response (or exception) comes from ``calls.reply``."""

    class Calls(list):
        reply: object = {}

    calls = Calls()

    def fake_upload(file, **options):
        calls.append((file, options))
        if isinstance(calls.reply, Exception):
            raise calls.reply
        return calls.reply

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    return calls


def test_successful_upload_returns_result_and_removes_file(uploader, sdk_calls, make_file):
    # Arrange
    sdk_calls.reply = {
        "secure_url": "https://res.cloudinary.com/demo/video/upload/v1/clip.mp4",
        "public_id": "clip",
        "resource_type": "video",
        "duration": 3.25,
    }
    path = make_file("clip.mp4", b"\x00\x01")

    # Act
    result = uploader.upload(path)

    # Assert
    assert result == UploadResult(
        url="https://res.cloudinary.com/demo/video/upload/v1/clip.mp4",
        public_id="clip",
        resource_type="video",
        duration=3.25,
    )
    assert not os.path.exists(path)
    (sent_path, options), = sdk_calls
    assert sent_path == path
    assert options["resource_type"] == "auto"
    assert (options["cloud_name"], options["api_key"], options["api_secret"]) == (
        "demo",
        "key-123",
        "shh",
    )


def test_image_without_duration(uploader, sdk_calls, make_file):
    sdk_calls.reply = {"url": "http://res.cloudinary.com/demo/a.png", "resource_type": "image"}

    result = uploader.upload(make_file("a.png"))

    assert result.url == "http://res.cloudinary.com/demo/a.png"
    assert result.duration is None


def test_rejected_upload_returns_none_and_removes_file(uploader, sdk_calls, make_file):
    sdk_calls.reply = cloudinary.exceptions.Error("Invalid image file")
    path = make_file("avatar.png")

    assert uploader.upload(path) is None
    assert not os.path.exists(path)


def test_malformed_response_returns_none(uploader, sdk_calls, make_file):
    sdk_calls.reply = {"public_id": "no-url"}

    assert uploader.upload(make_file("avatar.png")) is None


def test_empty_path_skips_the_sdk(uploader, sdk_calls):
    assert uploader.upload("") is None
    assert sdk_calls == []
