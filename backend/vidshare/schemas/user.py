"""User resource schemas.

Input schemas load camelCase request fields into snake_case keys and leave
blank/missing checks to the services, which own those messages.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class _Input(Schema):
    class Meta:
        unknown = EXCLUDE


class RegisterSchema(_Input):
    """Multipart form fields of the registration request."""

    username = fields.String(load_default=None)
    email = fields.String(load_default=None)
    full_name = fields.String(data_key="fullName", load_default=None)
    password = fields.String(load_default=None)


class ChangePasswordSchema(_Input):
    old_password = fields.String(data_key="oldPassword", load_default=None)
    new_password = fields.String(data_key="newPassword", load_default=None)
    confirm_password = fields.String(data_key="confirmNewPassword", load_default=None)


class UpdateAccountSchema(_Input):
    full_name = fields.String(data_key="fullName", load_default=None)
    email = fields.String(load_default=None)


class UserSchema(Schema):
    """Public representation of a user (never the hash or the refresh token)."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
    full_name = fields.String(data_key="fullName")
    avatar = fields.String()
    cover_image = fields.String(data_key="coverImage")
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)


class ChannelProfileSchema(Schema):
    """Channel profile: exactly the seven projected fields."""

    full_name = fields.String(data_key="fullName")
    username = fields.String()
    subscribers_count = fields.Integer(data_key="subscribersCount")
    channels_subscribed_to_count = fields.Integer(data_key="channelsSubscribedToCount")
    is_subscribed = fields.Boolean(data_key="isSubscribed")
    avatar = fields.String()
    email = fields.String()
