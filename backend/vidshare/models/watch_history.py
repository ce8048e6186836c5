"""Watch history rows: the ordered sequence of videos a user has opened."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User
    from .video import Video


class WatchHistoryEntry(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    One element of ``User.watchHistory``.

    Order is the primary key order; a video appears at most once per user.
    """

    __tablename__ = "watch_history"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    video_id: Mapped[int] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user: Mapped[User] = relationship(back_populates="watch_history_entries")
    video: Mapped[Video] = relationship()

    __table_args__ = (UniqueConstraint("user_id", "video_id", name="uq_watch_history_pair"),)
