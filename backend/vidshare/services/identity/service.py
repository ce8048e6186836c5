"""
IdentityService
===============

Application service for the ``User`` aggregate:

- Registration (with avatar and optional cover image upload)
- Current user retrieval
- Password lifecycle
- Profile and image updates

Token issuance lives in :mod:`vidshare.services.auth`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.exc import IntegrityError

from vidshare.models.user import User
from vidshare.services._shared.base import BaseService, ServiceContext
from vidshare.services._shared.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
    UploadFailedError,
    violates,
)
from vidshare.services._shared.ports.media_relay import MediaRelay
from vidshare.services.identity.dto import (
    AccountUpdateIn,
    PasswordChangeIn,
    RegisterIn,
    UserPublicOut,
)

log = logging.getLogger(__name__)


class IdentityService(BaseService):
    """
    Application service for the ``User`` aggregate.

    :param media_relay: Adapter uploading staged image files.
    """

    def __init__(self, *, media_relay: MediaRelay, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.media = media_relay

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register(self, dto: RegisterIn) -> UserPublicOut:
        """
        Register a new user.

        Checks run in order: blank fields, username/email availability,
        avatar presence, field validation, uploads. The user row is only
        created once the avatar upload succeeded.

        :param dto: Registration input with staged files.
        :returns: Public-safe user DTO.
        :raises InvalidInputError: Blank or malformed field, or missing avatar.
        :raises ConflictError: Username or email already registered.
        :raises UploadFailedError: The avatar upload returned nothing.
        """
        self.require_fields(
            {
                "username": dto.username,
                "email": dto.email,
                "fullName": dto.full_name,
                "password": dto.password,
            },
            "All fields are required",
        )
        username = str(dto.username).strip().lower()
        email = str(dto.email).strip().lower()

        with self.ro_uow() as uow:
            existing = uow.users.find_by_username_or_email(username=username, email=email)
            if existing is not None:
                if existing.email == email:
                    raise ConflictError("User", "email", email)
                raise ConflictError("User", "username", username)

        if dto.avatar_path is None:
            raise InvalidInputError("Avatar file is required")

        try:
            user = User(
                username=username,
                email=email,
                full_name=str(dto.full_name).strip(),
            )
            user.password = str(dto.password)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        avatar = self.media.upload(dto.avatar_path)
        if avatar is None:
            raise UploadFailedError("Avatar upload failed")
        cover = self.media.upload(dto.cover_image_path) if dto.cover_image_path else None
        user.avatar_url = avatar.url
        user.cover_image_url = cover.url if cover else ""

        with self.rw_uow() as uow:
            try:
                uow.users.add(user)
            except IntegrityError as exc:
                if violates(exc, "email"):
                    raise ConflictError("User", "email", email) from exc
                if violates(exc, "username"):
                    raise ConflictError("User", "username", username) from exc
                raise
            out = UserPublicOut.from_model(user)

        log.info("identity.registered", extra={"user_id": out.id})
        return out

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_current_user(self, user_id: int) -> UserPublicOut:
        """
        Retrieve the caller's safe projection.

        :raises NotFoundError: If user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserPublicOut.from_model(user)

    # --------------------------------------------------------------------- #
    # Password management
    # --------------------------------------------------------------------- #

    def change_password(self, user_id: int, dto: PasswordChangeIn) -> None:
        """
        Change the caller's password after verifying the old one.

        :raises InvalidInputError: Blank input or confirmation mismatch.
        :raises UnauthorizedError: Old password does not match.
        """
        self.require_fields(
            {
                "oldPassword": dto.old_password,
                "newPassword": dto.new_password,
                "confirmNewPassword": dto.confirm_password,
            }
        )
        if dto.new_password != dto.confirm_password:
            raise InvalidInputError("Password doesn't match")

        with self.rw_uow() as uow:
            user = uow.users.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            if not user.verify_password(dto.old_password):
                raise UnauthorizedError("Invalid old password")
            uow.users.update_password(user, str(dto.new_password))

        log.info("identity.password_changed", extra={"user_id": user_id})

    # --------------------------------------------------------------------- #
    # Profile updates
    # --------------------------------------------------------------------- #

    def update_account(self, user_id: int, dto: AccountUpdateIn) -> UserPublicOut:
        """
        Update full name and email.

        :raises InvalidInputError: Either field missing or blank.
        :raises ConflictError: Email belongs to another account.
        """
        self.require_fields(
            {"fullName": dto.full_name, "email": dto.email}, "All fields are required"
        )
        email = str(dto.email).strip().lower()

        with self.rw_uow() as uow:
            user = uow.users.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            if uow.users.email_taken_by_other(email, user_id):
                raise ConflictError("User", "email", email)
            try:
                uow.users.update(user, full_name=str(dto.full_name).strip(), email=email)
            except ValueError as exc:
                raise InvalidInputError(str(exc)) from exc
            except IntegrityError as exc:
                raise ConflictError("User", "email", email) from exc
            return UserPublicOut.from_model(user)

    def update_avatar(self, user_id: int, avatar_path: Path | None) -> UserPublicOut:
        """Upload a new avatar and point the user at it."""
        return self._replace_image(user_id, avatar_path, field="avatar_url", label="Avatar")

    def update_cover_image(self, user_id: int, cover_path: Path | None) -> UserPublicOut:
        """Upload a new cover image and point the user at it."""
        return self._replace_image(
            user_id, cover_path, field="cover_image_url", label="Cover image"
        )

    def _replace_image(
        self, user_id: int, path: Path | None, *, field: str, label: str
    ) -> UserPublicOut:
        if path is None:
            raise InvalidInputError(f"{label} file is missing")

        uploaded = self.media.upload(path)
        if uploaded is None:
            raise UploadFailedError(f"{label} upload failed")

        with self.rw_uow() as uow:
            user = uow.users.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            uow.users.update(user, **{field: uploaded.url})
            out = UserPublicOut.from_model(user)

        log.info("identity.image_updated", extra={"user_id": user_id})
        return out
