"""Subscription repository."""

from __future__ import annotations

from sqlalchemy import select

from vidshare.models.subscription import Subscription
from vidshare.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    model = Subscription

    def subscribe(self, subscriber_id: int, channel_id: int) -> tuple[Subscription, bool]:
        """Return the subscription for the pair and whether it was created."""
        existing = self.find(subscriber_id, channel_id)
        if existing is not None:
            return existing, False
        return self.add(Subscription(subscriber_id=subscriber_id, channel_id=channel_id)), True

    def find(self, subscriber_id: int, channel_id: int) -> Subscription | None:
        stmt = select(Subscription).where(
            Subscription.subscriber_id == subscriber_id,
            Subscription.channel_id == channel_id,
        )
        return self.session.execute(stmt).scalars().first()
