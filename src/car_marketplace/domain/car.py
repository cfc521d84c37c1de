from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from car_marketplace.domain.errors import ValidationError


# ==============================================================================
# Domain Exceptions
# ==============================================================================


class PagingValidationError(ValidationError):
    """Raised when paging parameters are invalid."""

    pass


class FilterValidationError(ValidationError):
    """Raised when filter parameters are invalid."""

    pass


MAX_PAGE_LIMIT = 200
DEFAULT_PAGE_LIMIT = 6


class CarStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"
    SOLD = "SOLD"


class SortOrder(str, enum.Enum):
    NEWEST = "newest"
    PRICE_ASC = "priceAsc"
    PRICE_DESC = "priceDesc"

    @classmethod
    def parse(cls, value: str | None) -> SortOrder:
        """Unknown or missing sort keys fall back to newest first."""
        try:
            return cls(value)
        except ValueError:
            return cls.NEWEST


@dataclass(frozen=True)
class Car:
    id: str
    make: str
    model: str
    year: int
    price: Decimal
    mileage: int = 0
    color: str = ""
    fuel_type: str = ""
    transmission: str = ""
    body_type: str = ""
    seats: int | None = None
    description: str = ""
    status: CarStatus = CarStatus.AVAILABLE
    featured: bool = False
    images: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class CarListing:
    """A car as seen by one caller: the car plus its wishlist membership."""

    car: Car
    wishlisted: bool = False


@dataclass(frozen=True, slots=True)
class CatalogFilters:
    search: str | None = None
    make: str | None = None
    body_type: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    min_price: Decimal = Decimal("0")
    max_price: Decimal | None = None  # None means unbounded

    def validate(self) -> None:
        """
        Validate filter parameters.

        Raises:
            FilterValidationError: If filter parameters are invalid
        """
        # Guardrails: prevent float leakage past boundary
        if not isinstance(self.min_price, Decimal):
            raise FilterValidationError("min_price must be Decimal")
        if self.max_price is not None and not isinstance(self.max_price, Decimal):
            raise FilterValidationError("max_price must be Decimal or None")

        if self.min_price < 0:
            raise FilterValidationError("min_price cannot be negative")


@dataclass(frozen=True, slots=True)
class Paging:
    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def pages_for(self, total: int) -> int:
        """Number of pages needed to show ``total`` rows (ceil division)."""
        return -(-total // self.limit)

    def validate(self) -> None:
        """
        Validate paging parameters.

        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        if self.page < 1:
            raise PagingValidationError("page must be >= 1")
        if self.limit <= 0:
            raise PagingValidationError("limit must be > 0")
        if self.limit > MAX_PAGE_LIMIT:
            raise PagingValidationError(f"limit must be <= {MAX_PAGE_LIMIT}")


@dataclass(frozen=True, slots=True)
class PriceRange:
    min: Decimal
    max: Decimal


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """Distinct values offered by the catalog filter UI."""

    makes: list[str] = field(default_factory=list)
    body_types: list[str] = field(default_factory=list)
    fuel_types: list[str] = field(default_factory=list)
    transmissions: list[str] = field(default_factory=list)
    price_range: PriceRange = PriceRange(min=Decimal("0"), max=Decimal("100000"))


FALLBACK_FILTER_OPTIONS = FilterOptions(
    makes=["Hyundai", "Honda", "BMW", "Tata", "Mahindra", "Ford"],
    body_types=["SUV", "Sedan", "Hatchback", "Convertible"],
    fuel_types=["Gasoline", "Diesel", "Electric", "Hybrid"],
    transmissions=["Automatic", "Manual"],
    price_range=PriceRange(min=Decimal("0"), max=Decimal("100000")),
)
