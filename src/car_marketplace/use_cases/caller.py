from __future__ import annotations

from car_marketplace.domain.user import CallerIdentity, User
from car_marketplace.ports.user_repository import UserRepository


def resolve_user(identity: CallerIdentity | None, users: UserRepository) -> User | None:
    """Marketplace user behind the caller's identity, or None for anonymous callers."""
    if identity is None:
        return None
    return users.get_by_external_auth_id(identity.external_auth_id)
