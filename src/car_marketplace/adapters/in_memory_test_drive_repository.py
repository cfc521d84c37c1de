from __future__ import annotations

from collections.abc import Collection
from datetime import datetime, timezone

from car_marketplace.domain.test_drive import BookingStatus, TestDriveBooking
from car_marketplace.ports.test_drive_repository import TestDriveRepository

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class InMemoryTestDriveRepository(TestDriveRepository):
    __test__ = False

    def __init__(self, bookings: list[TestDriveBooking] | None = None) -> None:
        self._bookings = list(bookings or [])

    def latest_for_user_and_car(
        self, user_id: str, car_id: str, statuses: Collection[BookingStatus]
    ) -> TestDriveBooking | None:
        matches = [
            booking
            for booking in self._bookings
            if booking.user_id == user_id and booking.car_id == car_id and booking.status in statuses
        ]
        return max(matches, key=lambda booking: booking.created_at or _EPOCH, default=None)
