# vidshare/services/auth/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from vidshare.services.identity.dto import UserPublicOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Username (either this or ``email`` is required).
    :type username: str | None
    :param email: Email (either this or ``username`` is required).
    :type email: str | None
    :param password: Raw password (to be verified).
    :type password: str | None
    """

    username: str | None
    email: str | None
    password: str | None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT from the cookie or the body.
    :type refresh_token: str | None
    """

    refresh_token: str | None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """Logged-in user (safe projection) plus the freshly issued pair."""

    user: UserPublicOut
    tokens: TokenPairOut


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration, built once from application settings.

    :param access_secret: Signing secret for access tokens.
    :type access_secret: str
    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_secret: Signing secret for refresh tokens.
    :type refresh_secret: str
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    :param algorithm: JWS algorithm shared by both token classes.
    :type algorithm: str
    :raises ValueError: If a secret is empty or both secrets are equal.
    """

    access_secret: str
    access_expires: timedelta
    refresh_secret: str
    refresh_expires: timedelta
    algorithm: str = "HS256"

    def __post_init__(self) -> None:
        if not self.access_secret or not self.refresh_secret:
            raise ValueError("Access and refresh token secrets must be configured.")
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh token secrets must differ.")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> AuthTokenConfig:
        """Build the configuration from a Flask-style config mapping."""
        return cls(
            access_secret=str(config.get("ACCESS_TOKEN_SECRET") or ""),
            access_expires=timedelta(
                minutes=int(config.get("ACCESS_TOKEN_EXPIRES_MINUTES", 15))
            ),
            refresh_secret=str(config.get("REFRESH_TOKEN_SECRET") or ""),
            refresh_expires=timedelta(days=int(config.get("REFRESH_TOKEN_EXPIRES_DAYS", 10))),
            algorithm=str(config.get("JWT_ALGORITHM") or "HS256"),
        )
