"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from .user import UserSchema


class LoginSchema(Schema):
    """Input payload for authenticating a user (username or email)."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default=None)
    email = fields.String(load_default=None)
    password = fields.String(load_default=None)


class RefreshSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(data_key="refreshToken", load_default=None)


class TokenPairSchema(Schema):
    """Response payload containing both tokens."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)


class LoginResponseSchema(Schema):
    """Response payload of a successful login: ``{user, accessToken, refreshToken}``."""

    user = fields.Nested(UserSchema, required=True)
    access_token = fields.String(data_key="accessToken", attribute="tokens.access_token")
    refresh_token = fields.String(data_key="refreshToken", attribute="tokens.refresh_token")
