# vidshare/services/auth/service.py
from __future__ import annotations

import logging

from vidshare.services._shared.base import BaseService, ServiceContext
from vidshare.services._shared.errors import (
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from vidshare.services._shared.ports.token_provider import TokenProvider
from vidshare.services.auth.dto import LoginIn, LoginOut, RefreshIn, TokenPairOut
from vidshare.services.auth.tokens import TokenService
from vidshare.services.identity.dto import UserPublicOut

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / refresh / logout).

    Credential checks happen here; token minting, rotation and revocation
    are delegated to :class:`~vidshare.services.auth.tokens.TokenService`.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for issuing/verifying JWTs.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.token_service = TokenService(token_provider=token_provider, ctx=self.ctx)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue a fresh token pair.

        The user is looked up by username or email, whichever is given (both
        case-insensitive).

        :param dto: Login input.
        :returns: Safe user projection plus the new token pair.
        :raises InvalidInputError: Neither username nor email, or no password.
        :raises NotFoundError: No user matches.
        :raises UnauthorizedError: The password does not match.
        """
        username = (dto.username or "").strip()
        email = (dto.email or "").strip()
        if not username and not email:
            raise InvalidInputError("username or email is required")
        if not dto.password:
            raise InvalidInputError("password is required")

        with self.ro_uow() as uow:
            user = uow.users.find_by_username_or_email(username=username, email=email)
            if user is None:
                raise NotFoundError("User", username or email)
            if not user.verify_password(dto.password):
                log.info("auth.login_failed", extra={"user_id": user.id})
                raise UnauthorizedError("Invalid user credentials")
            user_id = user.id

        tokens = self.token_service.issue_and_persist(user_id)

        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            out = UserPublicOut.from_model(user)

        log.info("auth.login", extra={"user_id": user_id})
        return LoginOut(user=out, tokens=tokens)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Rotate a refresh token and emit a new token pair.

        :raises UnauthorizedError: Missing or unverifiable token.
        :raises InvalidTokenError: Token refers to an unknown user.
        :raises TokenReusedError: Token is not the stored one.
        """
        return self.token_service.rotate(dto.refresh_token)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, user_id: int) -> None:
        """Clear the caller's stored refresh token."""
        self.token_service.revoke(user_id)
        log.info("auth.logout", extra={"user_id": user_id})
