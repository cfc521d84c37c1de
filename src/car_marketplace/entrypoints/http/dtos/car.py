from pydantic import Field

from car_marketplace.entrypoints.http.dtos.base import CamelDTO


class CarResponseDTO(CamelDTO):
    """JSON-safe car: price as a number, timestamps as ISO-8601 strings."""

    id: str
    make: str
    model: str
    year: int
    price: float
    mileage: int
    color: str
    fuel_type: str
    transmission: str
    body_type: str
    seats: int | None = None
    description: str
    status: str
    featured: bool
    images: list[str]
    created_at: str | None = None
    updated_at: str | None = None
    wishlisted: bool = False


class TestDriveSummaryDTO(CamelDTO):
    __test__ = False

    id: str
    status: str
    booking_date: str


class WorkingHourDTO(CamelDTO):
    id: str
    day_of_week: str
    open_time: str
    close_time: str
    is_open: bool
    created_at: str | None = None
    updated_at: str | None = None


class DealershipResponseDTO(CamelDTO):
    id: str
    name: str
    address: str
    phone: str
    email: str
    working_hours: list[WorkingHourDTO]
    created_at: str | None = None
    updated_at: str | None = None


class TestDriveInfoDTO(CamelDTO):
    __test__ = False

    user_test_drive: TestDriveSummaryDTO | None = None
    dealership: DealershipResponseDTO | None = None


class CarDetailResponseDTO(CarResponseDTO):
    test_drive_info: TestDriveInfoDTO


class PriceRangeDTO(CamelDTO):
    min: float
    max: float


class FilterOptionsDTO(CamelDTO):
    makes: list[str]
    body_types: list[str]
    fuel_types: list[str]
    transmissions: list[str]
    price_range: PriceRangeDTO


class SavedToggleResponseDTO(CamelDTO):
    """Wishlist toggle answer; ``saved``/``message`` sit beside ``success``."""

    success: bool
    saved: bool | None = None
    message: str | None = Field(default=None, examples=["Car added to favorites"])
    error: str | None = None
