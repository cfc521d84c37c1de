from __future__ import annotations

import logging
from dataclasses import dataclass, field

from car_marketplace.domain.car import CarListing, CatalogFilters, Paging, SortOrder
from car_marketplace.domain.errors import InternalError, ValidationError
from car_marketplace.domain.result import ActionResult, Pagination
from car_marketplace.domain.user import CallerIdentity
from car_marketplace.ports.car_catalog_repository import CarCatalogRepository
from car_marketplace.ports.saved_car_repository import SavedCarRepository
from car_marketplace.ports.user_repository import UserRepository
from car_marketplace.use_cases.caller import resolve_user

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SearchCarCatalogRequest:
    filters: CatalogFilters = field(default_factory=CatalogFilters)
    sort: SortOrder = SortOrder.NEWEST
    paging: Paging = field(default_factory=Paging)
    identity: CallerIdentity | None = None


class SearchCarCatalog:
    """
    Car search catalog with filters, ordering and pagination.

    This use case validates the request, delegates filtering to the
    repository adapter and marks each result with the caller's wishlist
    membership (one bulk lookup per request, not one per car).

    With ``fail_soft`` (the default) any failure after validation degrades to
    an empty page instead of an error.
    """

    def __init__(
        self,
        car_catalog_repository: CarCatalogRepository,
        user_repository: UserRepository,
        saved_car_repository: SavedCarRepository,
        fail_soft: bool = True,
    ) -> None:
        self._repository = car_catalog_repository
        self._users = user_repository
        self._saved_cars = saved_car_repository
        self._fail_soft = fail_soft

    def execute(self, request: SearchCarCatalogRequest) -> ActionResult[list[CarListing]]:
        """
        Execute catalog search.

        Args:
            request: Search parameters (filters, sort, paging) and caller identity

        Returns:
            ActionResult with the page of listings and pagination metadata
        """
        paging = request.paging
        try:
            request.filters.validate()
            paging.validate()
        except ValidationError as exc:
            return ActionResult.fatal(exc)

        try:
            user = resolve_user(request.identity, self._users)

            result = self._repository.search(
                filters=request.filters,
                sort=request.sort,
                paging=paging,
            )

            wishlisted: set[str] = set()
            if user is not None:
                wishlisted = self._saved_cars.saved_car_ids(user.id)
        except Exception as exc:
            if not self._fail_soft:
                logger.exception("Error fetching cars")
                return ActionResult.fatal(InternalError(f"Error fetching cars: {exc}"))

            logger.warning("Error fetching cars, serving empty page", extra={"error": str(exc)})
            return ActionResult.ok([], pagination=Pagination.empty(paging.page, paging.limit))

        listings = [CarListing(car=car, wishlisted=car.id in wishlisted) for car in result.cars]
        total = max(result.total_count, 0)

        return ActionResult.ok(
            listings,
            pagination=Pagination(
                total=total,
                page=paging.page,
                limit=paging.limit,
                pages=paging.pages_for(total),
            ),
        )
