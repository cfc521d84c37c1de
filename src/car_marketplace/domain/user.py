from __future__ import annotations

import enum
from dataclasses import dataclass


class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True, slots=True)
class CallerIdentity:
    """Identity asserted by the authentication provider for one request."""

    external_auth_id: str


@dataclass(frozen=True, slots=True)
class User:
    id: str
    external_auth_id: str
    email: str | None = None
    name: str | None = None
    role: UserRole = UserRole.USER
