from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from car_marketplace.domain.car import Car


CAR_ADDED_MESSAGE = "Car added to favorites"
CAR_REMOVED_MESSAGE = "Car removed from favorites"


@dataclass(frozen=True, slots=True)
class SavedCar:
    car: Car
    saved_at: datetime


@dataclass(frozen=True, slots=True)
class SavedToggle:
    """Wishlist membership after a toggle."""

    car_id: str
    saved: bool

    @property
    def message(self) -> str:
        return CAR_ADDED_MESSAGE if self.saved else CAR_REMOVED_MESSAGE
