"""Video repository: listing queries, view counters and cascade helpers."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, delete, or_, select, update

from vidshare.models.video import Video
from vidshare.models.watch_history import WatchHistoryEntry
from vidshare.repositories.base import BaseRepository


class VideoRepository(BaseRepository[Video]):
    model = Video

    def _sortable_fields(self):
        return {
            "createdAt": Video.created_at,
            "views": Video.views,
            "duration": Video.duration,
            "title": Video.title,
        }

    def _updatable_fields(self):
        return {"title", "description", "thumbnail_url", "is_published"}

    def visible_to(
        self,
        viewer_id: int | None,
        *,
        query: str | None = None,
        owner_id: int | None = None,
    ) -> Select[Any]:
        """
        Build the listing statement for ``viewer_id``.

        Published videos are visible to everyone; unpublished ones only to
        their owner. ``query`` matches title or description, case-insensitive.
        """
        visibility = Video.is_published.is_(True)
        if viewer_id is not None:
            visibility = or_(visibility, Video.owner_id == viewer_id)
        stmt = select(Video).where(visibility)

        if owner_id is not None:
            stmt = stmt.where(Video.owner_id == owner_id)
        if query:
            pattern = f"%{query.strip()}%"
            stmt = stmt.where(or_(Video.title.ilike(pattern), Video.description.ilike(pattern)))
        return stmt

    def increment_views(self, video: Video) -> None:
        """Increment the view counter with an atomic ``UPDATE``."""
        self.session.execute(
            update(Video).where(Video.id == video.id).values(views=Video.views + 1)
        )
        self.session.refresh(video, attribute_names=["views"])

    def delete_with_history(self, video: Video) -> None:
        """Delete ``video`` and every watch-history row pointing at it."""
        self.session.execute(delete(WatchHistoryEntry).where(WatchHistoryEntry.video_id == video.id))
        self.delete(video)
