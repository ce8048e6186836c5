"""Unit tests for error translation and the JSON error envelope."""

from __future__ import annotations

import pytest

from vidshare.core.errors import error_body, translate_service_error
from vidshare.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    InvalidInputError,
    InvalidTokenError,
    NotFoundError,
    ServiceError,
    ServiceUnavailableError,
    TokenReusedError,
    UnauthorizedError,
    UploadFailedError,
)


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (InvalidInputError("bad"), 400),
        (UnauthorizedError(), 401),
        (InvalidTokenError(), 401),
        (TokenReusedError(), 401),
        (AuthorizationError("no"), 403),
        (NotFoundError("Video", 1), 404),
        (ConflictError("User", "email", "a@b.co"), 409),
        (UploadFailedError("x"), 502),
        (ServiceUnavailableError("x"), 503),
        (ServiceError("generic"), 400),
    ],
)
def test_translate_service_error_status(exc, status):
    assert translate_service_error(exc).status_code == status


def test_translation_keeps_message():
    err = translate_service_error(TokenReusedError())
    assert err.message == "Refresh token is expired or used"


def test_error_body_shape():
    assert error_body(404, "missing") == {
        "status": 404,
        "message": "missing",
        "success": False,
        "errors": [],
    }


def test_unknown_route_renders_envelope(client):
    resp = client.get("/api/v1/nope")

    assert resp.status_code == 404
    body = resp.get_json()
    assert body["success"] is False
    assert body["message"] == "Route '/api/v1/nope' not found"


def test_method_not_allowed_renders_envelope(client):
    resp = client.delete("/api/v1/health")

    assert resp.status_code == 405
    assert resp.get_json()["status"] == 405
