"""
Fixed catalog served when the service runs in demo mode.

Nothing here touches the database; the records are plain domain objects.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from car_marketplace.domain.car import Car, CarStatus
from car_marketplace.domain.dealership import DayOfWeek, DealershipInfo, WorkingHour

_DEMO_EPOCH = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)
_IMAGE_BASE = "https://images.unsplash.com/photo-"

# (id, make, model, year, price, mileage, color, fuel, transmission, body, image)
_FEATURED_CARS = [
    ("1", "Hyundai", "Creta", 2023, "18500", 12000, "White", "Gasoline", "Automatic", "SUV", "1609521263047"),
    ("2", "Honda", "City", 2022, "14900", 21000, "Silver", "Gasoline", "Manual", "Sedan", "1618843479313"),
    ("3", "BMW", "Z4", 2021, "54000", 18000, "Red", "Gasoline", "Automatic", "Convertible", "1580273916550"),
    ("4", "Tata", "Nexon EV", 2023, "17500", 8000, "Blue", "Electric", "Automatic", "SUV", "1617788138017"),
    ("5", "Mahindra", "XUV700", 2022, "24900", 26000, "Black", "Diesel", "Manual", "SUV", "1606664515524"),
    ("6", "Ford", "Figo", 2020, "8900", 41000, "Grey", "Gasoline", "Manual", "Hatchback", "1541899481282"),
    ("7", "Honda", "Accord Hybrid", 2023, "31500", 9000, "Black", "Hybrid", "Automatic", "Sedan", "1590362891991"),
    ("8", "Hyundai", "i20", 2021, "11200", 33000, "Red", "Gasoline", "Manual", "Hatchback", "1494976388531"),
]


def _demo_car(index: int, entry: tuple) -> Car:
    car_id, make, model, year, price, mileage, color, fuel, transmission, body, image = entry
    listed_at = _DEMO_EPOCH + timedelta(days=index)
    return Car(
        id=car_id,
        make=make,
        model=model,
        year=year,
        price=Decimal(price),
        mileage=mileage,
        color=color,
        fuel_type=fuel,
        transmission=transmission,
        body_type=body,
        seats=5,
        description=f"{year} {make} {model}",
        status=CarStatus.AVAILABLE,
        featured=True,
        images=(f"{_IMAGE_BASE}{image}",),
        created_at=listed_at,
        updated_at=listed_at,
    )


DEMO_CARS: list[Car] = [_demo_car(index, entry) for index, entry in enumerate(_FEATURED_CARS)]


def _demo_hours() -> list[WorkingHour]:
    hours = []
    for day in DayOfWeek:
        weekend = day in (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY)
        hours.append(
            WorkingHour(
                id=f"demo-hours-{day.value.lower()}",
                day_of_week=day,
                open_time="10:00" if weekend else "09:00",
                close_time="16:00" if weekend else "18:00",
                is_open=day is not DayOfWeek.SUNDAY,
                created_at=_DEMO_EPOCH,
                updated_at=_DEMO_EPOCH,
            )
        )
    return hours


DEMO_DEALERSHIP = DealershipInfo(
    id="demo-dealership",
    name="Demo Motors",
    address="69 Car Street, Autoville, CA 69420",
    phone="+1 (555) 123-4567",
    email="contact@demomotors.example",
    working_hours=_demo_hours(),
    created_at=_DEMO_EPOCH,
    updated_at=_DEMO_EPOCH,
)
