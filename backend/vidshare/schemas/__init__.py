"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginResponseSchema, LoginSchema, RefreshSchema, TokenPairSchema
from .common import MetaSchema, PaginationQuerySchema
from .user import (
    ChangePasswordSchema,
    ChannelProfileSchema,
    RegisterSchema,
    UpdateAccountSchema,
    UserSchema,
)
from .video import (
    OwnerSchema,
    PublishVideoSchema,
    UpdateVideoSchema,
    VideoListQuerySchema,
    VideoSchema,
)

__all__ = [
    "ChangePasswordSchema",
    "ChannelProfileSchema",
    "LoginResponseSchema",
    "LoginSchema",
    "MetaSchema",
    "OwnerSchema",
    "PaginationQuerySchema",
    "PublishVideoSchema",
    "RefreshSchema",
    "RegisterSchema",
    "TokenPairSchema",
    "UpdateAccountSchema",
    "UpdateVideoSchema",
    "UserSchema",
    "VideoListQuerySchema",
    "VideoSchema",
]
