"""Shared API helpers for responses, auth, cookies and service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TypeVar, cast

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import current_user, verify_jwt_in_request

from vidshare.core.extensions import get_media_relay, get_token_provider
from vidshare.core.logger import ensure_request_id
from vidshare.infra.media.staging import stage_uploads
from vidshare.services._shared.base import ServiceContext
from vidshare.services.auth.dto import TokenPairOut
from vidshare.services.auth.service import AuthService
from vidshare.services.channels.service import ChannelService
from vidshare.services.identity.dto import UserPublicOut
from vidshare.services.identity.service import IdentityService
from vidshare.services.videos.service import VideoService

F = TypeVar("F", bound=Callable[..., Any])

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


# ------------------------------ Responses ------------------------------------


def api_response(data: Any = None, message: str = "Success", *, status: int = 200) -> Response:
    """Return the success envelope ``{status, data, message, success}``."""

    response = jsonify(
        {
            "status": status,
            "data": data if data is not None else {},
            "message": message,
            "success": status < 400,
        }
    )
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# -------------------------------- Auth ---------------------------------------


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token (cookie or bearer header)."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_identity() -> UserPublicOut:
    """Return the identity resolved by the auth middleware."""

    return cast(UserPublicOut, current_user)


def set_auth_cookies(response: Response, tokens: TokenPairOut) -> Response:
    """Attach both tokens as http-only cookies."""

    secure = bool(current_app.config.get("AUTH_COOKIE_SECURE", True))
    response.set_cookie(ACCESS_COOKIE, tokens.access_token, httponly=True, secure=secure)
    response.set_cookie(REFRESH_COOKIE, tokens.refresh_token, httponly=True, secure=secure)
    return response


def clear_auth_cookies(response: Response) -> Response:
    secure = bool(current_app.config.get("AUTH_COOKIE_SECURE", True))
    response.delete_cookie(ACCESS_COOKIE, httponly=True, secure=secure)
    response.delete_cookie(REFRESH_COOKIE, httponly=True, secure=secure)
    return response


# ------------------------------- Uploads -------------------------------------


@contextmanager
def staged_files(*fields: str) -> Iterator[dict[str, Path | None]]:
    """Stage the named multipart fields into ``UPLOAD_TEMP_DIR``."""

    with stage_uploads(request.files, fields, current_app.config["UPLOAD_TEMP_DIR"]) as staged:
        yield staged


# ------------------------------- Services ------------------------------------


def service_context(actor_id: int | None = None) -> ServiceContext:
    return ServiceContext(actor_id=actor_id, request_id=ensure_request_id())


def auth_service(actor_id: int | None = None) -> AuthService:
    return AuthService(token_provider=get_token_provider(), ctx=service_context(actor_id))


def identity_service(actor_id: int | None = None) -> IdentityService:
    return IdentityService(media_relay=get_media_relay(), ctx=service_context(actor_id))


def channel_service(actor_id: int | None = None) -> ChannelService:
    return ChannelService(ctx=service_context(actor_id))


def video_service(actor_id: int | None = None) -> VideoService:
    return VideoService(media_relay=get_media_relay(), ctx=service_context(actor_id))
