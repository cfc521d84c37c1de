#!/usr/bin/env python3
"""
Seed the marketplace tables with deterministic random data.

Features:
- Deterministic: fixed seed → same dataset every run
- Idempotent: safe to run multiple times (clears before seeding)
- Realism-lite: prices correlated with year + make band
- Seeds the dealership record with its weekly working hours

Usage:
    python scripts/seed_cars.py
"""

from __future__ import annotations

import random
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from car_marketplace.domain.car import CarStatus
from car_marketplace.domain.dealership import DayOfWeek
from car_marketplace.infra.db.models import (
    CarRow,
    DealershipInfoRow,
    SavedCarRow,
    TestDriveBookingRow,
    WorkingHourRow,
)
from car_marketplace.infra.db.session import get_session


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results
NUM_CARS = 50  # Number of cars to generate
CURRENT_YEAR = 2025
LISTING_EPOCH = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


# ==============================================================================
# Catalog Data
# ==============================================================================

# Make categories with price bands (USD)
MAKES = {
    "economy": {
        "makes": ["Tata", "Ford", "Hyundai"],
        "base_price_min": Decimal("8000"),
        "base_price_max": Decimal("18000"),
    },
    "mid_range": {
        "makes": ["Honda", "Mahindra"],
        "base_price_min": Decimal("15000"),
        "base_price_max": Decimal("35000"),
    },
    "premium": {
        "makes": ["BMW"],
        "base_price_min": Decimal("40000"),
        "base_price_max": Decimal("90000"),
    },
}

# (model, body type, seats)
MODELS_BY_MAKE = {
    "Tata": [("Nexon", "SUV", 5), ("Tiago", "Hatchback", 5), ("Harrier", "SUV", 5)],
    "Ford": [("Figo", "Hatchback", 5), ("EcoSport", "SUV", 5), ("Mustang", "Convertible", 4)],
    "Hyundai": [("Creta", "SUV", 5), ("i20", "Hatchback", 5), ("Verna", "Sedan", 5)],
    "Honda": [("City", "Sedan", 5), ("Civic", "Sedan", 5), ("CR-V", "SUV", 5)],
    "Mahindra": [("XUV700", "SUV", 7), ("Scorpio", "SUV", 7), ("Thar", "Convertible", 4)],
    "BMW": [("3 Series", "Sedan", 5), ("X5", "SUV", 5), ("Z4", "Convertible", 2)],
}

TRANSMISSIONS = ["Manual", "Automatic"]
FUEL_TYPES = ["Gasoline", "Diesel", "Hybrid", "Electric"]
COLORS = ["White", "Black", "Silver", "Grey", "Red", "Blue"]

DEALERSHIP = {
    "name": "Marketplace Motors",
    "address": "100 Main Street, Springfield",
    "phone": "+1 555 0100",
    "email": "sales@marketplace-motors.example",
}

# day → (open, close, is_open)
WORKING_HOURS = {
    DayOfWeek.MONDAY: ("09:00", "18:00", True),
    DayOfWeek.TUESDAY: ("09:00", "18:00", True),
    DayOfWeek.WEDNESDAY: ("09:00", "18:00", True),
    DayOfWeek.THURSDAY: ("09:00", "18:00", True),
    DayOfWeek.FRIDAY: ("09:00", "18:00", True),
    DayOfWeek.SATURDAY: ("10:00", "16:00", True),
    DayOfWeek.SUNDAY: ("00:00", "00:00", False),
}


# ==============================================================================
# Price Calculation with Realism
# ==============================================================================


def calculate_price(make: str, year: int) -> Decimal:
    """
    Calculate price based on make category and year.

    Logic:
    - Newer cars are more expensive
    - Premium brands cost more than economy
    - Price depreciates ~10% per year from base price
    """
    category = next(
        (cat_data for cat_data in MAKES.values() if make in cat_data["makes"]),
        MAKES["mid_range"],
    )

    base_price = Decimal(
        random.randint(int(category["base_price_min"]), int(category["base_price_max"]))
    )

    # Depreciation: ~10% per year, capped at 70% total depreciation
    years_old = max(0, CURRENT_YEAR - year)
    total_depreciation = min(Decimal("0.10") * years_old, Decimal("0.70"))
    depreciated_price = base_price * (Decimal("1") - total_depreciation)

    # Add some randomness (+/- 10%)
    variance = Decimal(str(random.uniform(0.90, 1.10)))
    final_price = depreciated_price * variance

    # Round to nearest 100
    final_price = (final_price / 100).quantize(Decimal("1")) * 100

    return max(final_price, Decimal("3000"))


# ==============================================================================
# Seed Generation
# ==============================================================================


def generate_car(index: int) -> CarRow:
    """Generate a single random car with realistic data."""
    category = random.choice(list(MAKES.keys()))
    make = random.choice(MAKES[category]["makes"])
    model, body_type, seats = random.choice(MODELS_BY_MAKE[make])

    # Year: 2016-2025 (weighted toward newer)
    year = random.choices(
        range(2016, 2026),
        weights=[1, 1, 2, 2, 3, 3, 4, 5, 6, 7],
        k=1,
    )[0]

    price = calculate_price(make, year)

    # Mileage: correlated with age
    years_old = CURRENT_YEAR - year
    max_mileage = min(200000, years_old * 15000 + random.randint(0, 20000))
    mileage = random.randint(0, max(1000, max_mileage))

    if year >= 2021 or category == "premium":
        transmission = random.choices(TRANSMISSIONS, weights=[1, 4], k=1)[0]
    else:
        transmission = random.choices(TRANSMISSIONS, weights=[3, 2], k=1)[0]

    if year >= 2022:
        fuel_type = random.choices(FUEL_TYPES, weights=[5, 1, 2, 1], k=1)[0]
    else:
        fuel_type = random.choices(FUEL_TYPES, weights=[7, 2, 1, 0], k=1)[0]

    # Mostly available inventory; a few sold/unavailable rows exercise the status filter
    status = random.choices(
        [CarStatus.AVAILABLE, CarStatus.UNAVAILABLE, CarStatus.SOLD],
        weights=[8, 1, 1],
        k=1,
    )[0]

    listed_at = LISTING_EPOCH + timedelta(hours=index * 7)

    return CarRow(
        make=make,
        model=model,
        year=year,
        price=price,
        mileage=mileage,
        color=random.choice(COLORS),
        fuel_type=fuel_type,
        transmission=transmission,
        body_type=body_type,
        seats=seats,
        description=f"{year} {make} {model}, {mileage:,} km, {transmission.lower()} transmission.",
        status=status,
        featured=random.random() < 0.2,
        images=[f"/images/cars/{make.lower()}-{model.lower().replace(' ', '-')}-{index}.jpg"],
        created_at=listed_at,
        updated_at=listed_at,
    )


def generate_dealership() -> DealershipInfoRow:
    dealership = DealershipInfoRow(**DEALERSHIP)
    dealership.working_hours = [
        WorkingHourRow(day_of_week=day, open_time=open_time, close_time=close_time, is_open=is_open)
        for day, (open_time, close_time, is_open) in WORKING_HOURS.items()
    ]
    return dealership


def seed_cars(num_cars: int = NUM_CARS, seed: int = RANDOM_SEED) -> None:
    """
    Seed the database with random car data and the dealership record.

    Args:
        num_cars: Number of cars to generate
        seed: Random seed for deterministic results
    """
    random.seed(seed)

    print(f"🌱 Seeding database with {num_cars} cars (seed={seed})...")

    with get_session() as session:
        # Step 1: Clear existing data (idempotent); children first
        print("🗑️  Clearing existing data...")
        session.query(SavedCarRow).delete()
        session.query(TestDriveBookingRow).delete()
        session.query(WorkingHourRow).delete()
        session.query(DealershipInfoRow).delete()
        deleted_count = session.query(CarRow).delete()
        print(f"   Deleted {deleted_count} existing cars")

        # Step 2: Generate and insert new rows
        print(f"🚗 Generating {num_cars} cars...")
        cars = [generate_car(index) for index in range(num_cars)]
        session.add_all(cars)
        session.add(generate_dealership())
        session.flush()

        print(f"✅ Successfully seeded {len(cars)} cars and 1 dealership!")

        print("\n📊 Sample cars:")
        for i, car in enumerate(cars[:5], 1):
            print(
                f"   {i}. {car.year} {car.make} {car.model} - "
                f"${car.price:,.2f} ({car.transmission}, {car.fuel_type}, {car.status.value})"
            )

        if len(cars) > 5:
            print(f"   ... and {len(cars) - 5} more")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_cars()
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
