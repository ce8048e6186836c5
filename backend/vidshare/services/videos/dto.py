"""DTOs for VideoService and for video projections reused by other services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vidshare.models.user import User
    from vidshare.models.video import Video

SORTABLE_FIELDS = ("createdAt", "views", "duration", "title")
SORT_DIRECTIONS = ("asc", "desc")


# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PublishVideoIn:
    """
    Input DTO for publishing a video.

    :param title: Non-blank title.
    :param description: Non-blank description.
    :param video_path: Staged video file; required.
    :param thumbnail_path: Staged thumbnail image; optional.
    """

    title: str | None
    description: str | None
    video_path: Path | None
    thumbnail_path: Path | None = None


@dataclass(frozen=True, slots=True)
class VideoListIn:
    """
    Listing filters.

    :param page: 1-based page number.
    :param limit: Page size.
    :param query: Case-insensitive substring of title or description.
    :param sort_by: One of :data:`SORTABLE_FIELDS`.
    :param sort_type: ``"asc"`` or ``"desc"``.
    :param user_id: Restrict to videos of this owner.
    """

    page: int = 1
    limit: int = 10
    query: str | None = None
    sort_by: str = "createdAt"
    sort_type: str = "desc"
    user_id: int | None = None


@dataclass(frozen=True, slots=True)
class VideoUpdateIn:
    title: str | None = None
    description: str | None = None
    thumbnail_path: Path | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class OwnerOut:
    """Reduced owner projection: ``{fullName, username, avatar}``."""

    full_name: str
    username: str
    avatar: str

    @classmethod
    def from_model(cls, user: User) -> OwnerOut:
        return cls(full_name=user.full_name, username=user.username, avatar=user.avatar_url)


@dataclass(frozen=True, slots=True)
class VideoOut:
    id: int
    title: str
    description: str
    video_url: str
    thumbnail_url: str | None
    duration: float
    views: int
    is_published: bool
    owner_id: int
    owner: OwnerOut | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, video: Video) -> VideoOut:
        return cls(
            id=video.id,
            title=video.title,
            description=video.description,
            video_url=video.video_url,
            thumbnail_url=video.thumbnail_url,
            duration=float(video.duration or 0.0),
            views=int(video.views or 0),
            is_published=bool(video.is_published),
            owner_id=video.owner_id,
            owner=OwnerOut.from_model(video.owner) if video.owner is not None else None,
            created_at=video.created_at,
            updated_at=video.updated_at,
        )
