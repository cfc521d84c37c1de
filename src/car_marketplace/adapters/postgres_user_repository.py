"""PostgreSQL implementation of UserRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from car_marketplace.domain.user import User
from car_marketplace.infra.db.models.user import UserRow
from car_marketplace.ports.user_repository import UserRepository


class PostgresUserRepository(UserRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_external_auth_id(self, external_auth_id: str) -> User | None:
        query = select(UserRow).where(UserRow.external_auth_id == external_auth_id)
        row = self._session.execute(query).scalar_one_or_none()
        if row is None:
            return None

        return User(
            id=str(row.id),
            external_auth_id=row.external_auth_id,
            email=row.email,
            name=row.name,
            role=row.role,
        )
