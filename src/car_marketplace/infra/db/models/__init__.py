from car_marketplace.infra.db.models.base import Base
from car_marketplace.infra.db.models.car import CarRow
from car_marketplace.infra.db.models.dealership import DealershipInfoRow, WorkingHourRow
from car_marketplace.infra.db.models.saved_car import SavedCarRow
from car_marketplace.infra.db.models.test_drive import TestDriveBookingRow
from car_marketplace.infra.db.models.user import UserRow

__all__ = [
    "Base",
    "CarRow",
    "DealershipInfoRow",
    "SavedCarRow",
    "TestDriveBookingRow",
    "UserRow",
    "WorkingHourRow",
]
