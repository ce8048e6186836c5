"""HTTP helper utilities for tests."""

from __future__ import annotations

import io


def upload(name: str, content: bytes = b"binary-payload") -> tuple[io.BytesIO, str]:
    """Return a ``(stream, filename)`` pair accepted by the test client for multipart."""

    return io.BytesIO(content), name


def assert_envelope(body: dict, *, status: int, success: bool) -> None:
    """Check the common response envelope fields."""

    assert body["status"] == status
    assert body["success"] is success
    assert "message" in body
    if success:
        assert "data" in body
    else:
        assert isinstance(body["errors"], list)


def set_cookies(resp) -> dict[str, str]:
    """Map cookie name to its raw ``Set-Cookie`` header value."""

    cookies: dict[str, str] = {}
    for header in resp.headers.getlist("Set-Cookie"):
        name = header.split("=", 1)[0]
        cookies[name] = header
    return cookies
