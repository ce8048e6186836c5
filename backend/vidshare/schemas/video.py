"""Video resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from vidshare.schemas.common import PaginationQuerySchema
from vidshare.services.videos.dto import SORT_DIRECTIONS, SORTABLE_FIELDS


class VideoListQuerySchema(PaginationQuerySchema):
    """Query parameters accepted by ``GET /videos``."""

    class Meta:
        unknown = EXCLUDE

    query = fields.String(load_default=None)
    sort_by = fields.String(
        data_key="sortBy", load_default="createdAt", validate=validate.OneOf(SORTABLE_FIELDS)
    )
    sort_type = fields.String(
        data_key="sortType", load_default="desc", validate=validate.OneOf(SORT_DIRECTIONS)
    )
    user_id = fields.Integer(data_key="userId", load_default=None)


class PublishVideoSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(load_default=None)
    description = fields.String(load_default=None)


class UpdateVideoSchema(PublishVideoSchema):
    pass


class OwnerSchema(Schema):
    full_name = fields.String(data_key="fullName")
    username = fields.String()
    avatar = fields.String()


class VideoSchema(Schema):
    """Public representation of a video with its reduced owner."""

    id = fields.Integer(required=True)
    title = fields.String()
    description = fields.String()
    video_url = fields.String(data_key="videoFile")
    thumbnail_url = fields.String(data_key="thumbnail", allow_none=True)
    duration = fields.Float()
    views = fields.Integer()
    is_published = fields.Boolean(data_key="isPublished")
    owner = fields.Nested(OwnerSchema, allow_none=True)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)
