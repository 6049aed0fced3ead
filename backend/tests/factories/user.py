"""Users with hashed passwords and unique handles."""

from __future__ import annotations

import factory
from vidshare.models.user import User

from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"viewer{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username.strip().lower()}@example.com")
    full_name = factory.Faker("name")
    avatar = factory.Sequence(lambda n: f"https://media.test/avatar-{n}.png")
    cover_image = None
    # Goes through the User.password setter, which stores the hash
    password = DEFAULT_PASSWORD
