from __future__ import annotations

import logging
from dataclasses import dataclass

from car_marketplace.domain.errors import InternalError, NotFoundError, UnauthorizedError
from car_marketplace.domain.result import ActionResult
from car_marketplace.domain.saved_car import SavedToggle
from car_marketplace.domain.user import CallerIdentity
from car_marketplace.ports.cache_invalidator import SAVED_CARS_PATH, CacheInvalidator
from car_marketplace.ports.car_catalog_repository import CarCatalogRepository
from car_marketplace.ports.saved_car_repository import SavedCarRepository
from car_marketplace.ports.user_repository import UserRepository
from car_marketplace.use_cases.caller import resolve_user
from car_marketplace.use_cases.get_car_by_id import CAR_NOT_FOUND

logger = logging.getLogger(__name__)

TOGGLE_ERROR_PREFIX = "Error toggling saved car: "
DEMO_MODE_DISABLED = "Saved cars are not available in demo mode"


@dataclass(frozen=True, slots=True)
class ToggleSavedCarRequest:
    car_id: str
    identity: CallerIdentity | None = None


class ToggleSavedCar:
    """
    Add a car to the caller's wishlist, or remove it if already there.

    Outcomes:
    - fatal UnauthorizedError without a caller identity
    - fatal NotFoundError when the identity has no marketplace user
    - soft "Car not found" for unknown cars (nothing is written)
    - fatal InternalError for anything unexpected

    Fatal messages are prefixed with TOGGLE_ERROR_PREFIX. The saved-cars
    view is invalidated after every successful toggle.
    """

    def __init__(
        self,
        car_catalog_repository: CarCatalogRepository,
        user_repository: UserRepository,
        saved_car_repository: SavedCarRepository,
        cache_invalidator: CacheInvalidator,
        demo_mode: bool = False,
    ) -> None:
        self._repository = car_catalog_repository
        self._users = user_repository
        self._saved_cars = saved_car_repository
        self._cache = cache_invalidator
        self._demo_mode = demo_mode

    def execute(self, request: ToggleSavedCarRequest) -> ActionResult[SavedToggle]:
        if self._demo_mode:
            return ActionResult.soft_failure(DEMO_MODE_DISABLED)

        if request.identity is None:
            return ActionResult.fatal(UnauthorizedError(f"{TOGGLE_ERROR_PREFIX}Unauthorized"))

        try:
            user = resolve_user(request.identity, self._users)
            if user is None:
                return ActionResult.fatal(
                    NotFoundError("User", message=f"{TOGGLE_ERROR_PREFIX}User not found")
                )

            car = self._repository.get_by_id(request.car_id)
            if car is None:
                return ActionResult.soft_failure(CAR_NOT_FOUND)

            saved = self._saved_cars.toggle(user.id, car.id)
        except Exception as exc:
            logger.exception("Error toggling saved car", extra={"car_id": request.car_id})
            return ActionResult.fatal(InternalError(f"{TOGGLE_ERROR_PREFIX}{exc}"))

        self._cache.invalidate(SAVED_CARS_PATH)

        logger.info(
            "Saved car toggled",
            extra={"user_id": user.id, "car_id": car.id, "saved": saved},
        )
        return ActionResult.ok(SavedToggle(car_id=car.id, saved=saved))
