from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime, timezone

from car_marketplace.domain.car import Car
from car_marketplace.domain.saved_car import SavedCar
from car_marketplace.ports.saved_car_repository import SavedCarRepository


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemorySavedCarRepository(SavedCarRepository):
    """
    Wishlist kept in a dict keyed by (user_id, car_id).

    Car records are resolved through ``car_lookup`` so saved entries always
    reflect the current catalog.
    """

    def __init__(
        self,
        car_lookup: Callable[[str], Car | None],
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._car_lookup = car_lookup
        self._clock = clock
        self._saved: dict[tuple[str, str], datetime] = {}
        self._lock = threading.Lock()

    def saved_car_ids(self, user_id: str) -> set[str]:
        return {car_id for (owner, car_id) in self._saved if owner == user_id}

    def is_saved(self, user_id: str, car_id: str) -> bool:
        return (user_id, car_id) in self._saved

    def toggle(self, user_id: str, car_id: str) -> bool:
        key = (user_id, car_id)
        with self._lock:
            if self._saved.pop(key, None) is not None:
                return False
            self._saved[key] = self._clock()
            return True

    def list_saved(self, user_id: str) -> list[SavedCar]:
        entries = sorted(
            ((saved_at, car_id) for (owner, car_id), saved_at in self._saved.items() if owner == user_id),
            reverse=True,
        )
        saved: list[SavedCar] = []
        for saved_at, car_id in entries:
            car = self._car_lookup(car_id)
            if car is not None:
                saved.append(SavedCar(car=car, saved_at=saved_at))
        return saved
