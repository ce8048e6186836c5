"""Access-token verification callbacks for flask-jwt-extended.

The access token is read from the ``accessToken`` cookie first and from the
``Authorization: Bearer`` header otherwise (``JWT_TOKEN_LOCATION``). Every
verification failure renders the standard 401 envelope.
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask

from vidshare.core.errors import error_response
from vidshare.core.extensions import db, jwt
from vidshare.repositories.user import UserRepository
from vidshare.services.identity.dto import UserPublicOut

log = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized request"
INVALID_TOKEN_MESSAGE = "Invalid access token"


def load_identity(jwt_data: dict[str, Any]) -> UserPublicOut | None:
    """Resolve the embedded ``sub`` to a safe user projection (no secrets)."""
    try:
        user_id = int(jwt_data["sub"])
    except (KeyError, TypeError, ValueError):
        return None
    user = UserRepository(session=db.session).get(user_id)
    return UserPublicOut.from_model(user) if user is not None else None


def init_app(app: Flask) -> None:
    """Register the JWT loaders; call after ``extensions.init_app``."""

    @jwt.user_lookup_loader
    def _user_lookup(_jwt_header: dict[str, Any], jwt_data: dict[str, Any]):
        return load_identity(jwt_data)

    @jwt.user_lookup_error_loader
    def _user_lookup_error(_jwt_header: dict[str, Any], jwt_data: dict[str, Any]):
        log.warning("auth.unknown_subject")
        return error_response(401, INVALID_TOKEN_MESSAGE)

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return error_response(401, UNAUTHORIZED_MESSAGE)

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        log.info("auth.invalid_token")
        return error_response(401, INVALID_TOKEN_MESSAGE)

    @jwt.expired_token_loader
    def _expired_token(_jwt_header: dict[str, Any], _jwt_data: dict[str, Any]):
        return error_response(401, INVALID_TOKEN_MESSAGE)

    @jwt.token_verification_failed_loader
    def _verification_failed(_jwt_header: dict[str, Any], _jwt_data: dict[str, Any]):
        return error_response(401, INVALID_TOKEN_MESSAGE)


__all__ = ["init_app", "load_identity"]
