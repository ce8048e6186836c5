"""User repository: lookups, credential state and the profile/history queries."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import Row, delete, exists, false, func, or_, select
from sqlalchemy.orm import joinedload

from vidshare.models.subscription import Subscription
from vidshare.models.user import User
from vidshare.models.video import Video
from vidshare.models.watch_history import WatchHistoryEntry
from vidshare.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It stores the refresh token handed to it but never creates or verifies
    tokens itself.
    """

    model = User

    def _sortable_fields(self):
        return {
            "id": User.id,
            "username": User.username,
            "createdAt": User.created_at,
        }

    def _updatable_fields(self):
        """Profile fields a user may change (not credentials)."""
        return {"email", "full_name", "avatar_url", "cover_image_url"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by username (case-insensitive)."""
        stmt = select(User).where(User.username == username.strip().lower())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_by_username_or_email(
        self, *, username: str | None = None, email: str | None = None
    ) -> User | None:
        """Return the first user matching either identifier, or ``None``."""
        clauses = []
        if username:
            clauses.append(User.username == username.strip().lower())
        if email:
            clauses.append(User.email == email.strip().lower())
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses)).order_by(User.id)
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def email_taken_by_other(self, email: str, user_id: int) -> bool:
        stmt = select(User.id).where(User.email == email.strip().lower(), User.id != user_id)
        return self.session.execute(stmt).first() is not None

    # ---------------------------- Credential state ----------------------------

    def update_password(self, user: User, new_password: str) -> None:
        """Assign a new raw password (the model hashes it) and flush."""
        user.password = new_password
        self.flush()

    def set_refresh_token(self, user_id: int, token: str | None) -> bool:
        """
        Overwrite the stored refresh token (``None`` clears it).

        :returns: ``False`` when the user does not exist.
        """
        user = self.get_for_update(user_id)
        if user is None:
            return False
        user.refresh_token = token
        self.flush()
        return True

    # ---------------------------- Channel profile ----------------------------

    def channel_profile(self, username: str, *, viewer_id: int | None) -> Row[Any] | None:
        """
        Build the channel profile row for ``username`` in a single query.

        Subscriber and subscription counts are correlated scalar subqueries;
        ``is_subscribed`` is an ``EXISTS`` on the viewer/channel pair.

        :returns: Row with ``full_name, username, avatar, email,
            subscribers_count, channels_subscribed_to_count, is_subscribed``
            or ``None`` when no user matches.
        """
        subscribers_count = (
            select(func.count(Subscription.id))
            .where(Subscription.channel_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        subscribed_to_count = (
            select(func.count(Subscription.id))
            .where(Subscription.subscriber_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        if viewer_id is None:
            is_subscribed: Any = false()
        else:
            is_subscribed = exists().where(
                Subscription.channel_id == User.id,
                Subscription.subscriber_id == viewer_id,
            )

        stmt = select(
            User.full_name,
            User.username,
            User.avatar_url.label("avatar"),
            User.email,
            subscribers_count.label("subscribers_count"),
            subscribed_to_count.label("channels_subscribed_to_count"),
            is_subscribed.label("is_subscribed"),
        ).where(User.username == username.strip().lower())
        return self.session.execute(stmt).first()

    # ---------------------------- Watch history ----------------------------

    def watch_history(self, user_id: int) -> list[Video]:
        """Return the user's watched videos in history order, owners loaded."""
        stmt = (
            select(Video)
            .join(WatchHistoryEntry, WatchHistoryEntry.video_id == Video.id)
            .where(WatchHistoryEntry.user_id == user_id)
            .options(joinedload(Video.owner))
            .order_by(WatchHistoryEntry.id.asc())
        )
        return list(self.session.execute(stmt).unique().scalars().all())

    def push_watch_history(self, user_id: int, video_id: int) -> None:
        """Move ``video_id`` to the end of the user's history (append if absent)."""
        self.session.execute(
            delete(WatchHistoryEntry).where(
                WatchHistoryEntry.user_id == user_id,
                WatchHistoryEntry.video_id == video_id,
            )
        )
        self.session.add(WatchHistoryEntry(user_id=user_id, video_id=video_id))
        self.flush()
