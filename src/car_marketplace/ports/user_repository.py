from __future__ import annotations

from abc import ABC, abstractmethod

from car_marketplace.domain.user import User


class UserRepository(ABC):
    @abstractmethod
    def get_by_external_auth_id(self, external_auth_id: str) -> User | None: ...
