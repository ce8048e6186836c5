"""Unit tests for configuration selection."""

from __future__ import annotations

import pytest

from vidshare.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("production", ProductionConfig),
        ("TESTING", TestingConfig),
        ("development", DevelopmentConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config_from_app_env(monkeypatch, value, expected):
    monkeypatch.setenv("APP_ENV", value)
    assert get_config() is expected


def test_get_config_defaults_to_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_config() is DevelopmentConfig


@pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
def test_env_bool_truthy(monkeypatch, raw):
    monkeypatch.setenv("SOME_FLAG", raw)
    assert env_bool("SOME_FLAG") is True


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("SOME_FLAG", raising=False)
    assert env_bool("SOME_FLAG", True) is True


def test_env_int(monkeypatch):
    monkeypatch.setenv("SOME_INT", "42")
    assert env_int("SOME_INT", 1) == 42
    monkeypatch.setenv("SOME_INT", " ")
    assert env_int("SOME_INT", 7) == 7


def test_testing_secrets_are_distinct():
    assert TestingConfig.ACCESS_TOKEN_SECRET != TestingConfig.REFRESH_TOKEN_SECRET
    assert TestingConfig.APP_ENV == "testing"
    assert ProductionConfig.APP_ENV == "production"


def test_app_uses_testing_config(app):
    assert app.config["TESTING"] is True
    assert app.config["JWT_SECRET_KEY"] == app.config["ACCESS_TOKEN_SECRET"]
