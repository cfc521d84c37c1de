"""PostgreSQL implementation of TestDriveRepository."""

from __future__ import annotations

from collections.abc import Collection
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from car_marketplace.domain.test_drive import BookingStatus, TestDriveBooking
from car_marketplace.infra.db.models.test_drive import TestDriveBookingRow
from car_marketplace.ports.test_drive_repository import TestDriveRepository


class PostgresTestDriveRepository(TestDriveRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def latest_for_user_and_car(
        self, user_id: str, car_id: str, statuses: Collection[BookingStatus]
    ) -> TestDriveBooking | None:
        query = (
            select(TestDriveBookingRow)
            .where(
                TestDriveBookingRow.user_id == UUID(user_id),
                TestDriveBookingRow.car_id == UUID(car_id),
                TestDriveBookingRow.status.in_(list(statuses)),
            )
            .order_by(TestDriveBookingRow.created_at.desc())
            .limit(1)
        )
        row = self._session.execute(query).scalars().first()
        if row is None:
            return None

        return TestDriveBooking(
            id=str(row.id),
            car_id=str(row.car_id),
            user_id=str(row.user_id),
            booking_date=row.booking_date,
            start_time=row.start_time,
            end_time=row.end_time,
            status=row.status,
            notes=row.notes,
            created_at=row.created_at,
        )
