from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    Channel profile projection.

    Exactly ``{fullName, username, subscribersCount, channelsSubscribedToCount,
    isSubscribed, avatar, email}`` once serialized.
    """

    full_name: str
    username: str
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool
    avatar: str
    email: str
