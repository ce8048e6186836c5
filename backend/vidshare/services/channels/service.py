"""
ChannelService
==============

Read-side aggregations over users: the public channel profile and the
caller's watch history.
"""

from __future__ import annotations

from vidshare.services._shared.base import BaseService
from vidshare.services._shared.errors import InvalidInputError, NotFoundError
from vidshare.services.channels.dto import ChannelProfileOut
from vidshare.services.videos.dto import VideoOut


class ChannelService(BaseService):
    def get_channel_profile(self, username: str | None, viewer_id: int | None) -> ChannelProfileOut:
        """
        Build the channel profile of ``username`` as seen by ``viewer_id``.

        :raises InvalidInputError: Blank username.
        :raises NotFoundError: No user with that (lowercased) username.
        """
        if username is None or not username.strip():
            raise InvalidInputError("username is missing")

        with self.ro_uow() as uow:
            row = uow.users.channel_profile(username, viewer_id=viewer_id)

        if row is None:
            raise NotFoundError("Channel", username.strip().lower())

        return ChannelProfileOut(
            full_name=row.full_name,
            username=row.username,
            subscribers_count=int(row.subscribers_count or 0),
            channels_subscribed_to_count=int(row.channels_subscribed_to_count or 0),
            is_subscribed=bool(row.is_subscribed),
            avatar=row.avatar,
            email=row.email,
        )

    def get_watch_history(self, user_id: int) -> list[VideoOut]:
        """Return the caller's watched videos, oldest first, owners reduced."""
        with self.ro_uow() as uow:
            return [VideoOut.from_model(video) for video in uow.users.watch_history(user_id)]
