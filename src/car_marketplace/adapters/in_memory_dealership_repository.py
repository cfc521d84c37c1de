from __future__ import annotations

from dataclasses import replace

from car_marketplace.domain.dealership import DealershipInfo
from car_marketplace.ports.dealership_repository import DealershipRepository


class InMemoryDealershipRepository(DealershipRepository):
    def __init__(self, dealership: DealershipInfo | None = None) -> None:
        self._dealership = dealership

    def get_first(self) -> DealershipInfo | None:
        if self._dealership is None:
            return None
        hours = sorted(self._dealership.working_hours, key=lambda hour: hour.day_of_week.ordinal)
        return replace(self._dealership, working_hours=hours)
