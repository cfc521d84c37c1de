from typing import Any

from fastapi import APIRouter, Depends

from car_marketplace.domain.user import CallerIdentity
from car_marketplace.entrypoints.http.dependencies import (
    get_caller_identity,
    get_car_by_id_use_case,
    get_car_filters_use_case,
    get_cars_search_query,
    get_search_catalog_use_case,
    get_toggle_saved_car_use_case,
)
from car_marketplace.entrypoints.http.dtos.car import (
    CarDetailResponseDTO,
    CarResponseDTO,
    FilterOptionsDTO,
    SavedToggleResponseDTO,
)
from car_marketplace.entrypoints.http.dtos.catalog_search import CarsSearchQueryDTO
from car_marketplace.entrypoints.http.dtos.envelope import EnvelopeDTO
from car_marketplace.entrypoints.http.error_responses import ErrorResponse
from car_marketplace.entrypoints.http.mappers.car_mapper import CarMapper
from car_marketplace.entrypoints.http.mappers.catalog_search_mapper import CatalogSearchMapper
from car_marketplace.use_cases.get_car_by_id import GetCarById, GetCarByIdRequest
from car_marketplace.use_cases.get_car_filters import GetCarFilters
from car_marketplace.use_cases.search_car_catalog import SearchCarCatalog
from car_marketplace.use_cases.toggle_saved_car import ToggleSavedCar, ToggleSavedCarRequest

router = APIRouter(tags=["Cars"])


@router.get(
    "/cars/filters",
    response_model=EnvelopeDTO[FilterOptionsDTO],
    response_model_exclude_unset=True,
    summary="Catalog filter options",
    description="""
    Distinct makes, body types, fuel types and transmissions over available
    cars, plus their price range.

    This endpoint always succeeds: when the catalog cannot be read (or the
    service runs in demo mode) a fixed vocabulary is returned instead.
    """,
)
def get_car_filters(
    use_case: GetCarFilters = Depends(get_car_filters_use_case),
) -> dict[str, Any]:
    result = use_case.execute()

    payload = None
    if result.succeeded and result.data is not None:
        payload = CarMapper.to_filter_options_response(result.data)
    return result.to_envelope(payload)


@router.get(
    "/cars",
    response_model=EnvelopeDTO[list[CarResponseDTO]],
    response_model_exclude_unset=True,
    summary="Search car catalog",
    description="""
    Search available cars with optional filters, sorting and pagination.

    ## Filters
    - `search`: case-insensitive substring of make, model or description
    - `make`, `bodyType`, `fuelType`, `transmission`: exact match
    - `minPrice` / `maxPrice`: inclusive; omit `maxPrice` for no upper bound

    ## Sorting
    `sortBy` is `newest` (default), `priceAsc` or `priceDesc`.

    ## Pagination
    - Default: page 1, limit 6
    - Max limit: 200

    ## Example
    ```
    GET /v1/cars?make=Honda&sortBy=priceAsc&page=1&limit=6
    ```
    """,
    responses={
        200: {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": [
                            {
                                "id": "550e8400-e29b-41d4-a716-446655440000",
                                "make": "Honda",
                                "model": "City",
                                "year": 2022,
                                "price": 14900.0,
                                "bodyType": "Sedan",
                                "wishlisted": False,
                            }
                        ],
                        "pagination": {"total": 8, "page": 1, "limit": 6, "pages": 2},
                    }
                }
            },
        },
        422: {"model": ErrorResponse, "description": "Validation error"},
    },
)
def get_cars(
    query: CarsSearchQueryDTO = Depends(get_cars_search_query),
    identity: CallerIdentity | None = Depends(get_caller_identity),
    use_case: SearchCarCatalog = Depends(get_search_catalog_use_case),
) -> dict[str, Any]:
    """Search cars endpoint following parse → execute → map → return pattern."""
    # 1. Map to domain request
    request = CatalogSearchMapper.to_domain_request(query, identity)

    # 2. Execute use case
    result = use_case.execute(request)

    # 3. Map to response
    return CatalogSearchMapper.to_listings_envelope(result)


@router.get(
    "/cars/{car_id}",
    response_model=EnvelopeDTO[CarDetailResponseDTO],
    response_model_exclude_unset=True,
    summary="Get car details",
    description="""
    A single car with the caller's wishlist flag, their latest active test
    drive booking for it and the dealership opening hours.

    An unknown id answers `{"success": false, "error": "Car not found"}`.
    """,
)
def get_car(
    car_id: str,
    identity: CallerIdentity | None = Depends(get_caller_identity),
    use_case: GetCarById = Depends(get_car_by_id_use_case),
) -> dict[str, Any]:
    result = use_case.execute(GetCarByIdRequest(car_id=car_id, identity=identity))

    payload = None
    if result.succeeded and result.data is not None:
        payload = CarMapper.to_car_detail_response(result.data)
    return result.to_envelope(payload)


@router.post(
    "/cars/{car_id}/save",
    response_model=SavedToggleResponseDTO,
    response_model_exclude_unset=True,
    summary="Toggle a car in the wishlist",
    description="""
    Saves the car for the caller, or removes it when it is already saved.

    Requires the identity header. Unknown cars answer a soft
    `{"success": false, "error": "Car not found"}` and nothing is written.
    """,
    responses={
        401: {"model": ErrorResponse, "description": "No caller identity"},
        404: {"model": ErrorResponse, "description": "Caller has no marketplace account"},
        500: {"model": ErrorResponse, "description": "Toggle failed"},
    },
)
def toggle_saved_car(
    car_id: str,
    identity: CallerIdentity | None = Depends(get_caller_identity),
    use_case: ToggleSavedCar = Depends(get_toggle_saved_car_use_case),
) -> SavedToggleResponseDTO:
    result = use_case.execute(ToggleSavedCarRequest(car_id=car_id, identity=identity))
    return CarMapper.to_toggle_response(result)
