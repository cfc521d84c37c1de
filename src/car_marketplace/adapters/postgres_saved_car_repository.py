"""PostgreSQL implementation of SavedCarRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, insert, select, text
from sqlalchemy.orm import Session

from car_marketplace.adapters.postgres_car_catalog_repository import car_row_to_domain
from car_marketplace.domain.saved_car import SavedCar
from car_marketplace.infra.db.models.saved_car import SavedCarRow
from car_marketplace.ports.saved_car_repository import SavedCarRepository

# One round trip: delete the pair if it exists, otherwise insert it.
# ON CONFLICT covers a concurrent toggle that inserted the pair first; the
# pair exists afterwards either way, so "saved" stays true.
_TOGGLE_SQL = text(
    """
    WITH deleted AS (
        DELETE FROM user_saved_cars
        WHERE user_id = CAST(:user_id AS uuid) AND car_id = CAST(:car_id AS uuid)
        RETURNING car_id
    ), inserted AS (
        INSERT INTO user_saved_cars (user_id, car_id, saved_at)
        SELECT CAST(:user_id AS uuid), CAST(:car_id AS uuid), now()
        WHERE NOT EXISTS (SELECT 1 FROM deleted)
        ON CONFLICT (user_id, car_id) DO NOTHING
        RETURNING car_id
    )
    SELECT NOT EXISTS (SELECT 1 FROM deleted) AS saved
    """
)


class PostgresSavedCarRepository(SavedCarRepository):
    """
    PostgreSQL implementation of SavedCarRepository.

    - toggle() is a single statement on PostgreSQL
    - Other dialects (SQLite in tests) run delete-then-insert inside the
      request transaction
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def saved_car_ids(self, user_id: str) -> set[str]:
        query = select(SavedCarRow.car_id).where(SavedCarRow.user_id == UUID(user_id))
        return {str(car_id) for car_id in self._session.execute(query).scalars()}

    def is_saved(self, user_id: str, car_id: str) -> bool:
        return self._session.get(SavedCarRow, (UUID(user_id), UUID(car_id))) is not None

    def toggle(self, user_id: str, car_id: str) -> bool:
        user_key, car_key = UUID(user_id), UUID(car_id)

        if self._session.get_bind().dialect.name == "postgresql":
            params = {"user_id": str(user_key), "car_id": str(car_key)}
            return bool(self._session.execute(_TOGGLE_SQL, params).scalar_one())

        deleted = self._session.execute(
            delete(SavedCarRow).where(
                SavedCarRow.user_id == user_key,
                SavedCarRow.car_id == car_key,
            )
        )
        if deleted.rowcount:
            return False

        self._session.execute(
            insert(SavedCarRow).values(
                user_id=user_key,
                car_id=car_key,
                saved_at=datetime.now(timezone.utc),
            )
        )
        return True

    def list_saved(self, user_id: str) -> list[SavedCar]:
        query = (
            select(SavedCarRow)
            .where(SavedCarRow.user_id == UUID(user_id))
            .order_by(SavedCarRow.saved_at.desc())
        )
        rows = self._session.execute(query).scalars().all()
        return [SavedCar(car=car_row_to_domain(row.car), saved_at=row.saved_at) for row in rows]
