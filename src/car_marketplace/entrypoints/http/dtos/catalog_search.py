from decimal import Decimal

from pydantic import BaseModel, Field

from car_marketplace.domain.car import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT


class CarsSearchQueryDTO(BaseModel):
    """Query parameters for searching cars in the catalog."""

    search: str = Field(
        default="",
        description="Case-insensitive text matched against make, model and description",
        examples=["civic"],
    )
    make: str = Field(default="", description="Exact make", examples=["Honda"])
    body_type: str = Field(default="", description="Exact body type", examples=["SUV"])
    fuel_type: str = Field(default="", description="Exact fuel type", examples=["Gasoline"])
    transmission: str = Field(default="", description="Exact transmission", examples=["Automatic"])
    min_price: Decimal = Field(
        default=Decimal("0"),
        description="Minimum price (inclusive)",
        examples=["10000"],
        ge=0,
    )
    max_price: Decimal | None = Field(
        default=None,
        description="Maximum price (inclusive); omitted means no upper bound",
        examples=["35000"],
        ge=0,
    )
    sort_by: str = Field(
        default="newest",
        description="newest, priceAsc or priceDesc; anything else sorts newest first",
        examples=["priceAsc"],
    )
    page: int = Field(default=1, description="1-based page number", examples=[1], ge=1)
    limit: int = Field(
        default=DEFAULT_PAGE_LIMIT,
        description="Cars per page",
        examples=[DEFAULT_PAGE_LIMIT],
        ge=1,
        le=MAX_PAGE_LIMIT,
    )
