"""
TokenService
============

Session-token lifecycle bound to a user identity: issue a pair, persist the
refresh token, rotate it and revoke it. Exactly one refresh token is valid
per account at any time (the one stored on the user row); the last write
wins, so a concurrent login or refresh invalidates the other party's token.
"""

from __future__ import annotations

import hmac
import logging

from vidshare.models.user import User
from vidshare.services._shared.base import BaseService, ServiceContext
from vidshare.services._shared.errors import (
    InvalidTokenError,
    NotFoundError,
    TokenReusedError,
    UnauthorizedError,
)
from vidshare.services._shared.ports.token_provider import TokenProvider
from vidshare.services.auth.dto import TokenPairOut

log = logging.getLogger(__name__)


class TokenService(BaseService):
    """
    Issue, rotate and revoke access/refresh token pairs.

    :param token_provider: Adapter signing and verifying both token classes.
        It carries the :class:`~vidshare.services.auth.dto.AuthTokenConfig`
        (secrets, lifetimes, algorithm).
    """

    def __init__(self, *, token_provider: TokenProvider, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.tokens = token_provider

    def _mint(self, user: User) -> TokenPairOut:
        access = self.tokens.create_access_token(
            identity=user.id,
            additional_claims={
                "username": user.username,
                "email": user.email,
                "full_name": user.full_name,
            },
        )
        refresh = self.tokens.create_refresh_token(identity=user.id)
        return TokenPairOut(access_token=access, refresh_token=refresh)

    # ------------------------------------------------------------------ #
    # Issue / persist
    # ------------------------------------------------------------------ #

    def issue_token_pair(self, user_id: int) -> TokenPairOut:
        """
        Mint a fresh pair for ``user_id`` without storing anything.

        :raises NotFoundError: If the user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return self._mint(user)

    def persist_refresh_token(self, user_id: int, token: str) -> None:
        """
        Overwrite the stored refresh token of ``user_id``.

        :raises NotFoundError: If the user does not exist.
        """
        with self.rw_uow() as uow:
            if not uow.users.set_refresh_token(user_id, token):
                raise NotFoundError("User", user_id)

    def issue_and_persist(self, user_id: int) -> TokenPairOut:
        """Mint a pair and store its refresh token in one transaction."""
        with self.rw_uow() as uow:
            user = uow.users.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            pair = self._mint(user)
            user.refresh_token = pair.refresh_token
            uow.users.flush()
        log.info("tokens.issued", extra={"user_id": user_id})
        return pair

    # ------------------------------------------------------------------ #
    # Rotate / revoke
    # ------------------------------------------------------------------ #

    def rotate(self, incoming: str | None) -> TokenPairOut:
        """
        Exchange a refresh token for a new pair.

        1. Verify signature, expiry and token class with the refresh secret.
        2. Load the user by the embedded id.
        3. Compare ``incoming`` with the stored token byte-for-byte.
        4. Issue a fresh pair and persist the new refresh token.

        :raises UnauthorizedError: Missing token or failed verification.
        :raises InvalidTokenError: The embedded user no longer exists.
        :raises TokenReusedError: The token is not the one currently stored.
        """
        if not incoming:
            raise UnauthorizedError()

        claims = self.tokens.decode_refresh(incoming)
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise UnauthorizedError() from exc

        with self.rw_uow() as uow:
            user = uow.users.get_for_update(user_id)
            if user is None:
                raise InvalidTokenError()

            stored = user.refresh_token or ""
            if not hmac.compare_digest(incoming.encode("utf-8"), stored.encode("utf-8")):
                log.warning("tokens.reuse_detected", extra={"user_id": user_id})
                raise TokenReusedError()

            pair = self._mint(user)
            user.refresh_token = pair.refresh_token
            uow.users.flush()

        log.info("tokens.rotated", extra={"user_id": user_id})
        return pair

    def revoke(self, user_id: int) -> None:
        """Clear the stored refresh token. Missing users are ignored."""
        with self.rw_uow() as uow:
            uow.users.set_refresh_token(user_id, None)
        log.info("tokens.revoked", extra={"user_id": user_id})
