"""Unit tests for the Cloudinary media relay, with the SDK upload call patched."""

from __future__ import annotations

import cloudinary.uploader
import pytest
from cloudinary.exceptions import Error as CloudinaryError
from urllib3.exceptions import ReadTimeoutError

from vidshare.infra.media.cloudinary_relay import CloudinaryMediaRelay
from vidshare.services._shared.errors import ServiceUnavailableError


@pytest.fixture()
def relay() -> CloudinaryMediaRelay:
    return CloudinaryMediaRelay(cloud_name="demo", api_key="key", api_secret="shh", timeout=2)


@pytest.fixture()
def local_file(tmp_path):
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00\x01video")
    return path


@pytest.fixture()
def sdk_calls(monkeypatch):
    """Patch ``cloudinary.uploader.upload``; set ``result`` or ``error`` on the returned dict."""
    calls: list[tuple[str, dict]] = []
    behaviour: dict = {"result": None, "error": None, "calls": calls}

    def _upload(file, **options):
        calls.append((file, options))
        if behaviour["error"] is not None:
            raise behaviour["error"]
        return behaviour["result"]

    monkeypatch.setattr(cloudinary.uploader, "upload", _upload)
    return behaviour


def _wrapped_timeout() -> CloudinaryError:
    try:
        try:
            raise ReadTimeoutError(None, "/v1_1/demo/auto/upload", "Read timed out.")
        except ReadTimeoutError as exc:
            raise CloudinaryError(f"Unexpected error - {exc!r}")
    except CloudinaryError as wrapped:
        return wrapped


def test_upload_success_returns_result_and_removes_file(relay, local_file, sdk_calls):
    sdk_calls["result"] = {
        "secure_url": "https://res.test/clip.mp4",
        "public_id": "clip",
        "duration": 3.5,
    }

    result = relay.upload(local_file)

    assert result is not None
    assert result.url == "https://res.test/clip.mp4"
    assert result.public_id == "clip"
    assert result.duration == 3.5
    assert not local_file.exists()

    [(file, options)] = sdk_calls["calls"]
    assert file == str(local_file)
    assert options["resource_type"] == "auto"
    assert options["timeout"] == 2
    assert options["cloud_name"] == "demo"
    assert options["api_key"] == "key"
    assert options["api_secret"] == "shh"


def test_upload_rejected_returns_none(relay, local_file, sdk_calls):
    sdk_calls["error"] = CloudinaryError("Invalid image file")

    assert relay.upload(local_file) is None
    assert not local_file.exists()


def test_upload_without_url_returns_none(relay, local_file, sdk_calls):
    sdk_calls["result"] = {"public_id": "clip"}

    assert relay.upload(local_file) is None


def test_upload_timeout_raises_unavailable(relay, local_file, sdk_calls):
    sdk_calls["error"] = _wrapped_timeout()

    with pytest.raises(ServiceUnavailableError):
        relay.upload(local_file)
    assert not local_file.exists()


def test_missing_path_returns_none(relay, tmp_path, sdk_calls):
    assert relay.upload(None) is None
    assert relay.upload(tmp_path / "absent.png") is None
    assert sdk_calls["calls"] == []


def test_unconfigured_relay_skips_sdk(local_file, sdk_calls):
    relay = CloudinaryMediaRelay.from_mapping({})

    assert relay.configured is False
    assert relay.upload(local_file) is None
    assert not local_file.exists()
    assert sdk_calls["calls"] == []


def test_from_mapping_reads_credentials():
    relay = CloudinaryMediaRelay.from_mapping(
        {
            "CLOUDINARY_CLOUD_NAME": "c",
            "CLOUDINARY_API_KEY": "k",
            "CLOUDINARY_API_SECRET": "s",
            "MEDIA_UPLOAD_TIMEOUT": 5,
        }
    )
    assert relay.configured is True
    assert relay.timeout == 5.0
