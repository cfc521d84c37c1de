from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from car_marketplace.domain.car import (
    Car,
    CarStatus,
    CatalogFilters,
    FilterOptions,
    Paging,
    PriceRange,
    SortOrder,
)
from car_marketplace.ports.car_catalog_repository import CarCatalogRepository, SearchResult

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class InMemoryCarCatalogRepository(CarCatalogRepository):
    """
    Canonical contract implementation for tests and demo mode.

    - Only AVAILABLE cars are searchable
    - Applies AND-semantics filtering (search text is an OR over make/model/description)
    - Sorts, then applies paging AFTER filtering
    - Returns total_count of matching cars before paging
    """

    def __init__(self, cars: list[Car]) -> None:
        self._cars = cars

    def filter_options(self) -> FilterOptions:
        available = [car for car in self._cars if car.status is CarStatus.AVAILABLE]
        prices = [car.price for car in available]

        return FilterOptions(
            makes=sorted({car.make for car in available}),
            body_types=sorted({car.body_type for car in available}),
            fuel_types=sorted({car.fuel_type for car in available}),
            transmissions=sorted({car.transmission for car in available}),
            price_range=PriceRange(
                min=min(prices, default=Decimal("0")),
                max=max(prices, default=Decimal("100000")),
            ),
        )

    def search(self, filters: CatalogFilters, sort: SortOrder, paging: Paging) -> SearchResult:
        # Trust that UseCase has validated inputs (contract programming)
        matches = [car for car in self._cars if self._matches(car, filters)]
        total_count = len(matches)  # Count BEFORE paging

        matches = self._sorted(matches, sort)

        start = paging.offset
        end = paging.offset + paging.limit
        return SearchResult(cars=matches[start:end], total_count=total_count)

    def get_by_id(self, car_id: str) -> Car | None:
        return next((car for car in self._cars if car.id == car_id), None)

    def _matches(self, car: Car, filters: CatalogFilters) -> bool:
        if car.status is not CarStatus.AVAILABLE:
            return False
        if filters.search:
            needle = filters.search.lower()
            haystacks = (car.make, car.model, car.description)
            if not any(needle in value.lower() for value in haystacks):
                return False
        if filters.make and car.make != filters.make:
            return False
        if filters.body_type and car.body_type != filters.body_type:
            return False
        if filters.fuel_type and car.fuel_type != filters.fuel_type:
            return False
        if filters.transmission and car.transmission != filters.transmission:
            return False
        if car.price < filters.min_price:
            return False
        if filters.max_price is not None and car.price > filters.max_price:
            return False
        return True

    @staticmethod
    def _sorted(cars: list[Car], sort: SortOrder) -> list[Car]:
        # Python's sort is stable: tie-break on id first, then the primary key
        cars = sorted(cars, key=lambda car: car.id)
        if sort is SortOrder.PRICE_ASC:
            return sorted(cars, key=lambda car: car.price)
        if sort is SortOrder.PRICE_DESC:
            return sorted(cars, key=lambda car: car.price, reverse=True)
        return sorted(cars, key=lambda car: car.created_at or _EPOCH, reverse=True)
