"""
VideoService
============

Publishing and owner-managed lifecycle of ``Video`` records. Reads apply a
visibility rule: published videos are visible to everyone, unpublished ones
only to their owner.
"""

from __future__ import annotations

import logging
from typing import Any

from vidshare.models.video import Video
from vidshare.services._shared.base import BaseService, ServiceContext
from vidshare.services._shared.dto import PageMeta
from vidshare.services._shared.errors import (
    InvalidInputError,
    NotFoundError,
    UploadFailedError,
)
from vidshare.services._shared.policies.common import is_owner
from vidshare.services._shared.ports.media_relay import MediaRelay
from vidshare.services.videos.dto import (
    SORT_DIRECTIONS,
    SORTABLE_FIELDS,
    PublishVideoIn,
    VideoListIn,
    VideoOut,
    VideoUpdateIn,
)

log = logging.getLogger(__name__)


class VideoService(BaseService):
    """
    Application service for the ``Video`` aggregate.

    :param media_relay: Adapter uploading staged video and thumbnail files.
    """

    def __init__(self, *, media_relay: MediaRelay, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.media = media_relay

    # --------------------------------------------------------------------- #
    # Publish
    # --------------------------------------------------------------------- #

    def publish(self, owner_id: int, dto: PublishVideoIn) -> VideoOut:
        """
        Upload the video (and thumbnail) and create the record.

        :raises InvalidInputError: Blank title/description or no video file.
        :raises UploadFailedError: An upload returned nothing.
        """
        self.require_fields(
            {"title": dto.title, "description": dto.description},
            "Title and description are required",
        )
        if dto.video_path is None:
            raise InvalidInputError("Video file is required")

        video_upload = self.media.upload(dto.video_path)
        if video_upload is None:
            raise UploadFailedError("Video upload failed")

        thumbnail_url = None
        if dto.thumbnail_path is not None:
            thumbnail = self.media.upload(dto.thumbnail_path)
            if thumbnail is None:
                raise UploadFailedError("Thumbnail upload failed")
            thumbnail_url = thumbnail.url

        with self.rw_uow() as uow:
            video = uow.videos.add(
                Video(
                    title=str(dto.title),
                    description=str(dto.description).strip(),
                    video_url=video_upload.url,
                    thumbnail_url=thumbnail_url,
                    duration=video_upload.duration,
                    owner_id=owner_id,
                )
            )
            out = VideoOut.from_model(video)

        log.info("videos.published", extra={"user_id": owner_id, "video_id": out.id})
        return out

    # --------------------------------------------------------------------- #
    # Reads
    # --------------------------------------------------------------------- #

    def list_videos(self, viewer_id: int | None, dto: VideoListIn) -> tuple[list[VideoOut], PageMeta]:
        """
        List videos visible to ``viewer_id``.

        :raises InvalidInputError: Unknown ``sort_by`` or ``sort_type``.
        """
        if dto.sort_by not in SORTABLE_FIELDS:
            raise InvalidInputError(f"sortBy must be one of: {', '.join(SORTABLE_FIELDS)}")
        sort_type = (dto.sort_type or "").lower()
        if sort_type not in SORT_DIRECTIONS:
            raise InvalidInputError("sortType must be 'asc' or 'desc'")

        token = f"-{dto.sort_by}" if sort_type == "desc" else dto.sort_by
        pagination = self.ensure_pagination(page=dto.page, limit=dto.limit, sort=[token])

        with self.ro_uow() as uow:
            stmt = uow.videos.visible_to(viewer_id, query=dto.query, owner_id=dto.user_id)
            page = uow.videos.paginate(stmt, pagination)
            items = [VideoOut.from_model(video) for video in page.items]

        meta = PageMeta.build(page=page.page, limit=page.limit, total=page.total)
        return items, meta

    def get_video(self, viewer_id: int, video_id: int) -> VideoOut:
        """
        Fetch a visible video, count the view and record it in the viewer's
        watch history (moving it to the end when already present).

        :raises NotFoundError: Missing, or unpublished and not owned by the viewer.
        """
        with self.rw_uow() as uow:
            video = uow.videos.get(video_id)
            if video is None or not (
                video.is_published or is_owner(actor_id=viewer_id, owner_id=video.owner_id)
            ):
                raise NotFoundError("Video", video_id)

            uow.videos.increment_views(video)
            uow.users.push_watch_history(viewer_id, video.id)
            out = VideoOut.from_model(video)

        log.info("videos.viewed", extra={"user_id": viewer_id, "video_id": video_id})
        return out

    # --------------------------------------------------------------------- #
    # Owner-only commands
    # --------------------------------------------------------------------- #

    def update_video(self, actor_id: int, video_id: int, dto: VideoUpdateIn) -> VideoOut:
        """
        Update title, description and/or thumbnail.

        Ownership is checked and the thumbnail uploaded before the row lock
        is taken.

        :raises InvalidInputError: Nothing to update, or a blank value.
        :raises AuthorizationError: Caller is not the owner.
        :raises UploadFailedError: Thumbnail upload returned nothing.
        """
        if dto.title is None and dto.description is None and dto.thumbnail_path is None:
            raise InvalidInputError("Provide title, description or thumbnail to update")

        updates: dict[str, Any] = {}
        if dto.title is not None:
            self.require_fields({"title": dto.title})
            updates["title"] = dto.title
        if dto.description is not None:
            self.require_fields({"description": dto.description})
            updates["description"] = dto.description.strip()

        if dto.thumbnail_path is not None:
            with self.ro_uow() as uow:
                self._owned_video(uow, actor_id, video_id, lock=False)
            thumbnail = self.media.upload(dto.thumbnail_path)
            if thumbnail is None:
                raise UploadFailedError("Thumbnail upload failed")
            updates["thumbnail_url"] = thumbnail.url

        with self.rw_uow() as uow:
            video = self._owned_video(uow, actor_id, video_id)
            uow.videos.update(video, **updates)
            out = VideoOut.from_model(video)

        log.info("videos.updated", extra={"user_id": actor_id, "video_id": video_id})
        return out

    def delete_video(self, actor_id: int, video_id: int) -> None:
        """Delete an owned video and its watch-history references."""
        with self.rw_uow() as uow:
            video = self._owned_video(uow, actor_id, video_id)
            uow.videos.delete_with_history(video)
        log.info("videos.deleted", extra={"user_id": actor_id, "video_id": video_id})

    def toggle_publish(self, actor_id: int, video_id: int) -> VideoOut:
        """Flip ``is_published`` on an owned video."""
        with self.rw_uow() as uow:
            video = self._owned_video(uow, actor_id, video_id)
            uow.videos.update(video, is_published=not video.is_published)
            return VideoOut.from_model(video)

    def _owned_video(self, uow, actor_id: int, video_id: int, *, lock: bool = True) -> Video:
        video = uow.videos.get_for_update(video_id) if lock else uow.videos.get(video_id)
        if video is None:
            raise NotFoundError("Video", video_id)
        self.ensure_owner(actor_id, video.owner_id, msg="Only the owner can modify this video")
        return video
