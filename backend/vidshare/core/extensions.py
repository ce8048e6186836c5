"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()

TOKEN_PROVIDER_KEY = "token_provider"
MEDIA_RELAY_KEY = "media_relay"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT and the outbound adapters.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. The token provider and
        the media relay are built once from configuration and stored in
        ``app.extensions`` so request handlers and tests share one instance.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from vidshare import models as _models  # noqa: F401

    migrate.init_app(app, db)

    from vidshare.infra.jwt.token_provider import JWTTokenProvider
    from vidshare.infra.media.cloudinary_relay import CloudinaryMediaRelay
    from vidshare.services.auth.dto import AuthTokenConfig

    token_cfg = AuthTokenConfig.from_mapping(app.config)
    # Request-side verification must use the same access secret the provider signs with.
    app.config["JWT_SECRET_KEY"] = token_cfg.access_secret
    app.config["JWT_ALGORITHM"] = token_cfg.algorithm
    jwt.init_app(app)

    app.extensions[TOKEN_PROVIDER_KEY] = JWTTokenProvider(token_cfg)
    app.extensions[MEDIA_RELAY_KEY] = CloudinaryMediaRelay.from_mapping(app.config)


def get_token_provider():
    """Return the token provider bound to the current application."""
    provider = current_app.extensions.get(TOKEN_PROVIDER_KEY)
    if provider is None:
        raise RuntimeError("Token provider is not initialized. Call init_app() first.")
    return provider


def get_media_relay():
    """Return the media relay bound to the current application."""
    relay = current_app.extensions.get(MEDIA_RELAY_KEY)
    if relay is None:
        raise RuntimeError("Media relay is not initialized. Call init_app() first.")
    return relay
