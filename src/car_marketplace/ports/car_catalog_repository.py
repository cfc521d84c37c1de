from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from car_marketplace.domain.car import Car, CatalogFilters, FilterOptions, Paging, SortOrder


@dataclass(frozen=True)
class SearchResult:
    """Result from catalog search including pagination metadata."""

    cars: list[Car]
    total_count: int = 0  # Total matching cars before paging


class CarCatalogRepository(ABC):
    """
    Port for catalog data access.

    Contract (Preconditions):
        - filters and paging parameters must be pre-validated by caller (UseCase)
        - Implementations trust inputs are valid and do not re-validate
        - Only AVAILABLE cars are visible to search and filter discovery;
          get_by_id returns a car regardless of its status
    """

    @abstractmethod
    def filter_options(self) -> FilterOptions:
        """
        Distinct make/body/fuel/transmission values (ascending) and the
        price range over available inventory.
        """
        ...

    @abstractmethod
    def search(self, filters: CatalogFilters, sort: SortOrder, paging: Paging) -> SearchResult:
        """
        Search catalog with filters, sort order and paging.

        Args:
            filters: Filter criteria (AND semantics, search text is an OR group) - pre-validated
            sort: Result ordering
            paging: Pagination parameters - pre-validated

        Returns:
            SearchResult containing the requested page and the total count
        """
        ...

    @abstractmethod
    def get_by_id(self, car_id: str) -> Car | None:
        """Return the car, or None when it does not exist or the id is malformed."""
        ...
