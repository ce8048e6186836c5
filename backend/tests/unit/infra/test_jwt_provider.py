"""Unit tests for the PyJWT token provider."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from vidshare.infra.jwt.token_provider import JWTTokenProvider
from vidshare.services._shared.errors import UnauthorizedError
from vidshare.services.auth.dto import AuthTokenConfig


@pytest.fixture()
def cfg() -> AuthTokenConfig:
    return AuthTokenConfig(
        access_secret="access-secret",
        access_expires=timedelta(minutes=15),
        refresh_secret="refresh-secret",
        refresh_expires=timedelta(days=10),
    )


@pytest.fixture()
def provider(cfg) -> JWTTokenProvider:
    return JWTTokenProvider(cfg)


class TestJWTTokenProvider:
    def test_access_token_claims(self, provider):
        token = provider.create_access_token(identity=7, additional_claims={"username": "neo"})

        claims = provider.decode_access(token)

        assert claims["sub"] == "7"
        assert claims["type"] == "access"
        assert claims["username"] == "neo"
        assert claims["exp"] - claims["iat"] == 15 * 60

    def test_refresh_token_uses_its_own_secret(self, provider):
        token = provider.create_refresh_token(identity=7)

        assert provider.decode_refresh(token)["sub"] == "7"
        jwt.decode(token, "refresh-secret", algorithms=["HS256"])
        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(token, "access-secret", algorithms=["HS256"])

    def test_same_second_tokens_differ(self, provider, freeze_time):
        with freeze_time("2024-05-01 12:00:00"):
            first = provider.create_refresh_token(identity=1)
            second = provider.create_refresh_token(identity=1)
        assert first != second

    def test_token_classes_are_not_interchangeable(self, provider):
        access = provider.create_access_token(identity=1)
        refresh = provider.create_refresh_token(identity=1)

        with pytest.raises(UnauthorizedError):
            provider.decode_refresh(access)
        with pytest.raises(UnauthorizedError):
            provider.decode_access(refresh)

    def test_expired_token_rejected(self, provider, freeze_time):
        with freeze_time("2024-01-01 00:00:00"):
            token = provider.create_access_token(identity=1)
        with freeze_time("2024-01-01 00:16:00"), pytest.raises(UnauthorizedError):
            provider.decode_access(token)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token_rejected(self, provider, token):
        with pytest.raises(UnauthorizedError):
            provider.decode_access(token)


class TestAuthTokenConfig:
    def test_equal_secrets_rejected(self):
        with pytest.raises(ValueError, match="must differ"):
            AuthTokenConfig(
                access_secret="same",
                access_expires=timedelta(minutes=1),
                refresh_secret="same",
                refresh_expires=timedelta(days=1),
            )

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            AuthTokenConfig.from_mapping({"ACCESS_TOKEN_SECRET": "a"})

    def test_from_mapping(self):
        cfg = AuthTokenConfig.from_mapping(
            {
                "ACCESS_TOKEN_SECRET": "a",
                "REFRESH_TOKEN_SECRET": "r",
                "ACCESS_TOKEN_EXPIRES_MINUTES": "5",
                "REFRESH_TOKEN_EXPIRES_DAYS": 2,
            }
        )
        assert cfg.access_expires == timedelta(minutes=5)
        assert cfg.refresh_expires == timedelta(days=2)
        assert cfg.algorithm == "HS256"
