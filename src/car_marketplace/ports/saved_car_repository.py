from __future__ import annotations

from abc import ABC, abstractmethod

from car_marketplace.domain.saved_car import SavedCar


class SavedCarRepository(ABC):
    """
    Port for wishlist storage.

    A (user, car) pair is stored at most once.
    """

    @abstractmethod
    def saved_car_ids(self, user_id: str) -> set[str]:
        """All car ids saved by the user, fetched in one lookup."""
        ...

    @abstractmethod
    def is_saved(self, user_id: str, car_id: str) -> bool: ...

    @abstractmethod
    def toggle(self, user_id: str, car_id: str) -> bool:
        """
        Remove the pair if present, otherwise insert it, as one storage operation.

        Returns:
            True if the car is saved after the call, False if it was removed
        """
        ...

    @abstractmethod
    def list_saved(self, user_id: str) -> list[SavedCar]:
        """Saved cars with their car records, most recently saved first."""
        ...
