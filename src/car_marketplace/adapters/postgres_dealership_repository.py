"""PostgreSQL implementation of DealershipRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from car_marketplace.domain.dealership import DealershipInfo, WorkingHour
from car_marketplace.infra.db.models.dealership import DealershipInfoRow
from car_marketplace.ports.dealership_repository import DealershipRepository


class PostgresDealershipRepository(DealershipRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_first(self) -> DealershipInfo | None:
        query = select(DealershipInfoRow).order_by(DealershipInfoRow.created_at.asc()).limit(1)
        row = self._session.execute(query).scalars().first()
        if row is None:
            return None

        hours = [
            WorkingHour(
                id=str(hour.id),
                day_of_week=hour.day_of_week,
                open_time=hour.open_time,
                close_time=hour.close_time,
                is_open=hour.is_open,
                created_at=hour.created_at,
                updated_at=hour.updated_at,
            )
            for hour in row.working_hours
        ]
        # Enum order in the database differs between backends; sort in Python
        hours.sort(key=lambda hour: hour.day_of_week.ordinal)

        return DealershipInfo(
            id=str(row.id),
            name=row.name,
            address=row.address,
            phone=row.phone,
            email=row.email,
            working_hours=hours,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
