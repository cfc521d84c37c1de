"""Get car by ID use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from car_marketplace.domain.car import CarListing
from car_marketplace.domain.dealership import DealershipInfo
from car_marketplace.domain.result import ActionResult
from car_marketplace.domain.test_drive import ACTIVE_BOOKING_STATUSES, TestDriveBooking
from car_marketplace.domain.user import CallerIdentity
from car_marketplace.ports.car_catalog_repository import CarCatalogRepository
from car_marketplace.ports.dealership_repository import DealershipRepository
from car_marketplace.ports.saved_car_repository import SavedCarRepository
from car_marketplace.ports.test_drive_repository import TestDriveRepository
from car_marketplace.ports.user_repository import UserRepository
from car_marketplace.use_cases.caller import resolve_user

logger = logging.getLogger(__name__)

CAR_NOT_FOUND = "Car not found"


@dataclass(frozen=True, slots=True)
class GetCarByIdRequest:
    """Request to get a car by ID."""

    car_id: str
    identity: CallerIdentity | None = None


@dataclass(frozen=True, slots=True)
class GetCarByIdResponse:
    """The car as seen by the caller plus what the test-drive panel needs."""

    listing: CarListing
    user_test_drive: TestDriveBooking | None = None
    dealership: DealershipInfo | None = None


class GetCarById:
    """
    Use case for retrieving a single car with its test-drive context.

    Responsibilities:
    - Resolve the optional caller to a marketplace user
    - Return a soft "Car not found" when the car does not exist
    - Report wishlist membership and the caller's latest active booking
    - Attach the dealership record with its working hours
    """

    def __init__(
        self,
        car_catalog_repository: CarCatalogRepository,
        user_repository: UserRepository,
        saved_car_repository: SavedCarRepository,
        test_drive_repository: TestDriveRepository,
        dealership_repository: DealershipRepository,
    ) -> None:
        self._repository = car_catalog_repository
        self._users = user_repository
        self._saved_cars = saved_car_repository
        self._test_drives = test_drive_repository
        self._dealerships = dealership_repository

    def execute(self, request: GetCarByIdRequest) -> ActionResult[GetCarByIdResponse]:
        """
        Execute the get car by ID use case.

        Args:
            request: Request containing car_id and the caller identity

        Returns:
            ActionResult with GetCarByIdResponse, or a soft failure
        """
        try:
            user = resolve_user(request.identity, self._users)

            car = self._repository.get_by_id(request.car_id)
            if car is None:
                return ActionResult.soft_failure(CAR_NOT_FOUND)

            wishlisted = False
            user_test_drive = None
            if user is not None:
                wishlisted = self._saved_cars.is_saved(user.id, car.id)
                user_test_drive = self._test_drives.latest_for_user_and_car(
                    user.id, car.id, ACTIVE_BOOKING_STATUSES
                )

            dealership = self._dealerships.get_first()
        except Exception as exc:
            logger.error(
                "Error fetching car details",
                extra={"car_id": request.car_id, "error": str(exc)},
            )
            return ActionResult.soft_failure(str(exc))

        return ActionResult.ok(
            GetCarByIdResponse(
                listing=CarListing(car=car, wishlisted=wishlisted),
                user_test_drive=user_test_drive,
                dealership=dealership,
            )
        )
