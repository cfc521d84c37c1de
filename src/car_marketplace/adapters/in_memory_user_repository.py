from __future__ import annotations

from car_marketplace.domain.user import User
from car_marketplace.ports.user_repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self, users: list[User] | None = None) -> None:
        self._users = {user.external_auth_id: user for user in users or []}

    def get_by_external_auth_id(self, external_auth_id: str) -> User | None:
        return self._users.get(external_auth_id)
