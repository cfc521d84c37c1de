from __future__ import annotations

from decimal import Decimal
from typing import Any

from car_marketplace.domain.car import CarListing, CatalogFilters, Paging, SortOrder
from car_marketplace.domain.result import ActionResult
from car_marketplace.domain.user import CallerIdentity
from car_marketplace.entrypoints.http.dtos.catalog_search import CarsSearchQueryDTO
from car_marketplace.entrypoints.http.mappers.car_mapper import CarMapper
from car_marketplace.use_cases.search_car_catalog import SearchCarCatalogRequest

# Clients send this as "no maximum" (largest integer a JS number holds exactly)
UNBOUNDED_PRICE_SENTINEL = Decimal(2**53 - 1)


class CatalogSearchMapper:
    """Maps between REST DTOs and domain models for catalog search."""

    @staticmethod
    def to_domain_filters(dto: CarsSearchQueryDTO) -> CatalogFilters:
        """
        Converts query params to domain filters.

        A missing, zero or sentinel max_price means no upper bound. Empty
        strings mean "no filter".

        Args:
            dto: The data transfer object containing search query parameters

        Returns:
            CatalogFilters: Domain filters with Decimal prices
        """
        max_price = dto.max_price
        if not max_price or max_price >= UNBOUNDED_PRICE_SENTINEL:
            max_price = None

        return CatalogFilters(
            search=dto.search.strip() or None,
            make=dto.make or None,
            body_type=dto.body_type or None,
            fuel_type=dto.fuel_type or None,
            transmission=dto.transmission or None,
            min_price=dto.min_price,
            max_price=max_price,
        )

    @staticmethod
    def to_domain_paging(dto: CarsSearchQueryDTO) -> Paging:
        return Paging(page=dto.page, limit=dto.limit)

    @staticmethod
    def to_domain_request(
        dto: CarsSearchQueryDTO, identity: CallerIdentity | None = None
    ) -> SearchCarCatalogRequest:
        """
        Convenience method: builds complete domain request from DTO.

        Args:
            dto: The data transfer object containing search query parameters
            identity: Caller identity, if authenticated

        Returns:
            SearchCarCatalogRequest: Complete domain request
        """
        return SearchCarCatalogRequest(
            filters=CatalogSearchMapper.to_domain_filters(dto),
            sort=SortOrder.parse(dto.sort_by),
            paging=CatalogSearchMapper.to_domain_paging(dto),
            identity=identity,
        )

    @staticmethod
    def to_listings_envelope(result: ActionResult[list[CarListing]]) -> dict[str, Any]:
        """
        Converts a listing result into the response envelope.

        Raises:
            DomainError: If the result is a fatal failure
        """
        payload = None
        if result.succeeded:
            payload = [
                CarMapper.to_car_response(listing.car, listing.wishlisted)
                for listing in result.data or []
            ]
        return result.to_envelope(payload)
