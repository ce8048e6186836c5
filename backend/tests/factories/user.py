"""Factory Boy definition for :class:`vidshare.models.user.User`."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory
from vidshare.models.user import User

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """Build persisted users with a hashed password and an avatar URL."""

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    full_name = factory.Faker("name")
    avatar_url = factory.LazyAttribute(lambda o: f"https://media.test/{o.username}.png")
    cover_image_url = ""
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        obj.password = extracted or DEFAULT_PASSWORD
