from typing import Generic, TypeVar

from car_marketplace.entrypoints.http.dtos.base import CamelDTO

T = TypeVar("T")


class PaginationDTO(CamelDTO):
    total: int
    page: int
    limit: int
    pages: int


class EnvelopeDTO(CamelDTO, Generic[T]):
    """
    Uniform response wrapper.

    Success: ``{"success": true, "data": ..., "pagination": ...}``
    Soft failure: ``{"success": false, "error": "..."}``
    """

    success: bool
    data: T | None = None
    error: str | None = None
    pagination: PaginationDTO | None = None
