from __future__ import annotations

from datetime import date, datetime

from car_marketplace.domain.car import Car, FilterOptions
from car_marketplace.domain.dealership import DealershipInfo, WorkingHour
from car_marketplace.domain.result import ActionResult
from car_marketplace.domain.saved_car import SavedToggle
from car_marketplace.domain.test_drive import TestDriveBooking
from car_marketplace.entrypoints.http.dtos.car import (
    CarDetailResponseDTO,
    CarResponseDTO,
    DealershipResponseDTO,
    FilterOptionsDTO,
    PriceRangeDTO,
    SavedToggleResponseDTO,
    TestDriveInfoDTO,
    TestDriveSummaryDTO,
    WorkingHourDTO,
)
from car_marketplace.use_cases.get_car_by_id import GetCarByIdResponse


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class CarMapper:
    """Serializes domain cars and their context into JSON-safe response DTOs."""

    @staticmethod
    def to_car_response(car: Car, wishlisted: bool = False) -> CarResponseDTO:
        """
        Converts a domain Car entity to its response DTO.

        Handles Decimal → float and datetime → ISO string at the boundary.

        Args:
            car: Domain Car entity
            wishlisted: Whether the caller has saved this car

        Returns:
            CarResponseDTO: REST response DTO with primitive values only
        """
        return CarResponseDTO(
            id=car.id,
            make=car.make,
            model=car.model,
            year=car.year,
            price=float(car.price),
            mileage=car.mileage,
            color=car.color,
            fuel_type=car.fuel_type,
            transmission=car.transmission,
            body_type=car.body_type,
            seats=car.seats,
            description=car.description,
            status=car.status.value,
            featured=car.featured,
            images=list(car.images),
            created_at=_iso(car.created_at),
            updated_at=_iso(car.updated_at),
            wishlisted=wishlisted,
        )

    @staticmethod
    def to_test_drive_summary(booking: TestDriveBooking) -> TestDriveSummaryDTO:
        return TestDriveSummaryDTO(
            id=booking.id,
            status=booking.status.value,
            booking_date=booking.booking_date.isoformat(),
        )

    @staticmethod
    def to_working_hour_response(hour: WorkingHour) -> WorkingHourDTO:
        return WorkingHourDTO(
            id=hour.id,
            day_of_week=hour.day_of_week.value,
            open_time=hour.open_time,
            close_time=hour.close_time,
            is_open=hour.is_open,
            created_at=_iso(hour.created_at),
            updated_at=_iso(hour.updated_at),
        )

    @staticmethod
    def to_dealership_response(dealership: DealershipInfo) -> DealershipResponseDTO:
        return DealershipResponseDTO(
            id=dealership.id,
            name=dealership.name,
            address=dealership.address,
            phone=dealership.phone,
            email=dealership.email,
            working_hours=[
                CarMapper.to_working_hour_response(hour) for hour in dealership.working_hours
            ],
            created_at=_iso(dealership.created_at),
            updated_at=_iso(dealership.updated_at),
        )

    @staticmethod
    def to_car_detail_response(detail: GetCarByIdResponse) -> CarDetailResponseDTO:
        """
        Car response nested with the caller's test drive and the dealership.

        Args:
            detail: Use case response for a single car

        Returns:
            CarDetailResponseDTO with ``testDriveInfo``
        """
        car = CarMapper.to_car_response(detail.listing.car, detail.listing.wishlisted)
        user_test_drive = (
            CarMapper.to_test_drive_summary(detail.user_test_drive)
            if detail.user_test_drive is not None
            else None
        )
        dealership = (
            CarMapper.to_dealership_response(detail.dealership)
            if detail.dealership is not None
            else None
        )

        return CarDetailResponseDTO(
            **car.model_dump(),
            test_drive_info=TestDriveInfoDTO(
                user_test_drive=user_test_drive,
                dealership=dealership,
            ),
        )

    @staticmethod
    def to_filter_options_response(options: FilterOptions) -> FilterOptionsDTO:
        return FilterOptionsDTO(
            makes=list(options.makes),
            body_types=list(options.body_types),
            fuel_types=list(options.fuel_types),
            transmissions=list(options.transmissions),
            price_range=PriceRangeDTO(
                min=float(options.price_range.min),
                max=float(options.price_range.max),
            ),
        )

    @staticmethod
    def to_toggle_response(result: ActionResult[SavedToggle]) -> SavedToggleResponseDTO:
        """
        Flattens a toggle result: ``saved`` and ``message`` sit beside ``success``.

        Raises:
            DomainError: If the result is a fatal failure
        """
        result.raise_if_fatal()

        if not result.succeeded or result.data is None:
            return SavedToggleResponseDTO(success=False, error=result.error)

        return SavedToggleResponseDTO(
            success=True,
            saved=result.data.saved,
            message=result.data.message,
        )
