from .base import BaseRepository, Page, Pagination
from .subscription import SubscriptionRepository
from .user import UserRepository
from .video import VideoRepository

__all__ = [
    "BaseRepository",
    "Page",
    "Pagination",
    "SubscriptionRepository",
    "UserRepository",
    "VideoRepository",
]
