"""
DTOs for IdentityService.

Data Transfer Objects isolate the service layer from ORM models. Output
DTOs never carry the password hash or the stored refresh token.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vidshare.models.user import User

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for user registration.

    :param username: Public handle (stored lowercased).
    :type username: str | None
    :param email: Login email.
    :type email: str | None
    :param full_name: Display name.
    :type full_name: str | None
    :param password: Raw password to be hashed by the model.
    :type password: str | None
    :param avatar_path: Staged avatar file; required.
    :type avatar_path: Path | None
    :param cover_image_path: Staged cover image file; optional.
    :type cover_image_path: Path | None
    """

    username: str | None
    email: str | None
    full_name: str | None
    password: str | None
    avatar_path: Path | None = None
    cover_image_path: Path | None = None


@dataclass(frozen=True, slots=True)
class PasswordChangeIn:
    """
    Input DTO for changing the caller's password.

    :param old_password: Current password.
    :param new_password: Replacement password.
    :param confirm_password: Must equal ``new_password``.
    """

    old_password: str | None
    new_password: str | None
    confirm_password: str | None


@dataclass(frozen=True, slots=True)
class AccountUpdateIn:
    full_name: str | None
    email: str | None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe user projection.

    :param id: User identifier.
    :param username: Lowercased handle.
    :param email: Login email.
    :param full_name: Display name.
    :param avatar: Avatar URL.
    :param cover_image: Cover image URL, empty when absent.
    """

    id: int
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, user: User) -> UserPublicOut:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar=user.avatar_url,
            cover_image=user.cover_image_url or "",
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
