from __future__ import annotations

import logging

from car_marketplace.domain.car import CarListing
from car_marketplace.domain.result import ActionResult
from car_marketplace.domain.user import CallerIdentity
from car_marketplace.ports.saved_car_repository import SavedCarRepository
from car_marketplace.ports.user_repository import UserRepository
from car_marketplace.use_cases.caller import resolve_user

logger = logging.getLogger(__name__)


class GetSavedCars:
    """The caller's wishlist, most recently saved first."""

    def __init__(
        self,
        user_repository: UserRepository,
        saved_car_repository: SavedCarRepository,
    ) -> None:
        self._users = user_repository
        self._saved_cars = saved_car_repository

    def execute(self, identity: CallerIdentity | None) -> ActionResult[list[CarListing]]:
        if identity is None:
            return ActionResult.soft_failure("Unauthorized")

        try:
            user = resolve_user(identity, self._users)
            if user is None:
                return ActionResult.soft_failure("User not found")

            saved = self._saved_cars.list_saved(user.id)
        except Exception as exc:
            logger.error("Error fetching saved cars", extra={"error": str(exc)})
            return ActionResult.soft_failure(str(exc))

        return ActionResult.ok([CarListing(car=entry.car, wishlisted=True) for entry in saved])
