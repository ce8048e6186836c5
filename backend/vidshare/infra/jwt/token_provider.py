# vidshare/infra/jwt/token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast
from uuid import uuid4

import jwt

from vidshare.services._shared.errors import UnauthorizedError
from vidshare.services._shared.ports import TokenProvider
from vidshare.services.auth.dto import AuthTokenConfig

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    PyJWT adapter signing each token class with its own secret.

    Access tokens use the same secret and algorithm flask-jwt-extended is
    configured with, so they verify on the request side. Both classes carry
    ``type`` and a random ``jti``, so two tokens minted in the same second
    for the same user never collide.
    """

    cfg: AuthTokenConfig

    def _encode(
        self,
        *,
        identity: int | str,
        token_type: str,
        secret: str,
        expires_delta: timedelta,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        now = datetime.now(tz=UTC)
        payload: dict[str, Any] = dict(additional_claims or {})
        payload.update(
            {
                "sub": str(identity),
                "type": token_type,
                "jti": uuid4().hex,
                "iat": now,
                "nbf": now,
                "exp": now + expires_delta,
            }
        )
        return jwt.encode(payload, secret, algorithm=self.cfg.algorithm)

    def _decode(self, token: str, *, secret: str, expected_type: str) -> dict[str, Any]:
        if not token:
            raise UnauthorizedError()
        try:
            claims = cast(
                dict[str, Any],
                jwt.decode(
                    token,
                    secret,
                    algorithms=[self.cfg.algorithm],
                    options={"require": ["exp", "sub", "type"]},
                ),
            )
        except jwt.PyJWTError as exc:
            raise UnauthorizedError() from exc
        if claims.get("type") != expected_type:
            raise UnauthorizedError()
        return claims

    def create_access_token(
        self, *, identity: int | str, additional_claims: dict[str, Any] | None = None
    ) -> str:
        return self._encode(
            identity=identity,
            token_type=ACCESS_TOKEN_TYPE,
            secret=self.cfg.access_secret,
            expires_delta=self.cfg.access_expires,
            additional_claims=additional_claims,
        )

    def create_refresh_token(self, *, identity: int | str) -> str:
        return self._encode(
            identity=identity,
            token_type=REFRESH_TOKEN_TYPE,
            secret=self.cfg.refresh_secret,
            expires_delta=self.cfg.refresh_expires,
        )

    def decode_access(self, token: str) -> dict[str, Any]:
        return self._decode(token, secret=self.cfg.access_secret, expected_type=ACCESS_TOKEN_TYPE)

    def decode_refresh(self, token: str) -> dict[str, Any]:
        return self._decode(
            token, secret=self.cfg.refresh_secret, expected_type=REFRESH_TOKEN_TYPE
        )
