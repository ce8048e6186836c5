"""Idempotent demo data set (users, videos, subscriptions) for local use."""

from __future__ import annotations

import logging

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from vidshare.models.user import User
from vidshare.models.video import Video
from vidshare.repositories.subscription import SubscriptionRepository

LOGGER = logging.getLogger(__name__)

PLACEHOLDER_AVATAR = "https://res.cloudinary.com/demo/image/upload/sample.jpg"
PLACEHOLDER_VIDEO = "https://res.cloudinary.com/demo/video/upload/dog.mp4"

USER_FIXTURES: list[dict[str, str]] = [
    {
        "username": "alexm",
        "email": "alex.martinez@example.com",
        "full_name": "Alex Martinez",
        "password": "devPass123!",
    },
    {
        "username": "jamielee",
        "email": "jamie.lee@example.com",
        "full_name": "Jamie Lee",
        "password": "strongPass123",
    },
    {
        "username": "sarak",
        "email": "sara.kim@example.com",
        "full_name": "Sara Kim",
        "password": "watchMore2024",
    },
]

VIDEO_FIXTURES: list[dict[str, object]] = [
    {"owner": "alexm", "title": "Morning city timelapse", "duration": 42.5, "published": True},
    {"owner": "alexm", "title": "Editing workflow notes", "duration": 610.0, "published": False},
    {"owner": "jamielee", "title": "Street food tour", "duration": 903.2, "published": True},
]

# (subscriber, channel)
SUBSCRIPTION_FIXTURES: list[tuple[str, str]] = [
    ("jamielee", "alexm"),
    ("sarak", "alexm"),
    ("alexm", "jamielee"),
]


def _bump(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    counters = summary.setdefault(table, {"created": 0, "existing": 0})
    counters["created" if created else "existing"] += 1


def _seed_users(session: Session, summary: dict[str, dict[str, int]]) -> dict[str, User]:
    users: dict[str, User] = {}
    for fixture in USER_FIXTURES:
        user = session.execute(
            select(User).where(User.username == fixture["username"])
        ).scalar_one_or_none()
        created = user is None
        if user is None:
            user = User(
                username=fixture["username"],
                email=fixture["email"],
                full_name=fixture["full_name"],
                avatar_url=PLACEHOLDER_AVATAR,
            )
            user.password = fixture["password"]
            session.add(user)
            session.flush()
        users[user.username] = user
        _bump(summary, "users", created)
    return users


def _seed_videos(
    session: Session, users: dict[str, User], summary: dict[str, dict[str, int]]
) -> None:
    for fixture in VIDEO_FIXTURES:
        owner = users[str(fixture["owner"])]
        existing = session.execute(
            select(Video).where(Video.owner_id == owner.id, Video.title == fixture["title"])
        ).scalar_one_or_none()
        if existing is None:
            session.add(
                Video(
                    title=str(fixture["title"]),
                    description=f"Demo video: {fixture['title']}",
                    video_url=PLACEHOLDER_VIDEO,
                    duration=float(fixture["duration"]),  # type: ignore[arg-type]
                    is_published=bool(fixture["published"]),
                    owner_id=owner.id,
                )
            )
        _bump(summary, "videos", existing is None)


def _seed_subscriptions(
    session: Session, users: dict[str, User], summary: dict[str, dict[str, int]]
) -> None:
    repo = SubscriptionRepository(session=session)
    for subscriber, channel in SUBSCRIPTION_FIXTURES:
        _, created = repo.subscribe(users[subscriber].id, users[channel].id)
        _bump(summary, "subscriptions", created)


def run_all(db: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Seed every fixture group and commit; return per-table counters."""
    session = db.session
    summary: dict[str, dict[str, int]] = {}
    users = _seed_users(session, summary)
    _seed_videos(session, users, summary)
    _seed_subscriptions(session, users, summary)
    session.commit()
    if verbose:
        LOGGER.debug("seed.summary %s", summary)
    return summary
