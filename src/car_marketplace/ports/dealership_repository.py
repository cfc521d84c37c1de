from __future__ import annotations

from abc import ABC, abstractmethod

from car_marketplace.domain.dealership import DealershipInfo


class DealershipRepository(ABC):
    @abstractmethod
    def get_first(self) -> DealershipInfo | None:
        """The dealership record with working hours ordered Monday to Sunday."""
        ...
