from typing import Any

from fastapi import APIRouter, Depends

from car_marketplace.domain.user import CallerIdentity
from car_marketplace.entrypoints.http.dependencies import (
    get_caller_identity,
    get_saved_cars_use_case,
)
from car_marketplace.entrypoints.http.dtos.car import CarResponseDTO
from car_marketplace.entrypoints.http.dtos.envelope import EnvelopeDTO
from car_marketplace.entrypoints.http.mappers.catalog_search_mapper import CatalogSearchMapper
from car_marketplace.use_cases.get_saved_cars import GetSavedCars

router = APIRouter(tags=["Saved cars"])


@router.get(
    "/saved-cars",
    response_model=EnvelopeDTO[list[CarResponseDTO]],
    response_model_exclude_unset=True,
    summary="List the caller's saved cars",
    description="Most recently saved first. Anonymous callers get a soft `Unauthorized`.",
)
def get_saved_cars(
    identity: CallerIdentity | None = Depends(get_caller_identity),
    use_case: GetSavedCars = Depends(get_saved_cars_use_case),
) -> dict[str, Any]:
    result = use_case.execute(identity)
    return CatalogSearchMapper.to_listings_envelope(result)
