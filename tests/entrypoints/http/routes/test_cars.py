"""
Test suite for the /v1/cars routes.

The routes run against real use cases wired to in-memory repositories, so
these tests cover the whole HTTP path:
- Query parameters are read with their camelCase names and validated
- Responses use the {success, data|error, pagination?} envelope
- Soft failures answer HTTP 200 with success false
- Fatal failures go through the exception handlers
"""

from __future__ import annotations

import itertools
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from car_marketplace.adapters.in_memory_car_catalog_repository import InMemoryCarCatalogRepository
from car_marketplace.adapters.in_memory_dealership_repository import InMemoryDealershipRepository
from car_marketplace.adapters.in_memory_saved_car_repository import InMemorySavedCarRepository
from car_marketplace.adapters.in_memory_test_drive_repository import InMemoryTestDriveRepository
from car_marketplace.adapters.in_memory_user_repository import InMemoryUserRepository
from car_marketplace.demo.fixtures import DEMO_CARS, DEMO_DEALERSHIP
from car_marketplace.domain.car import Car
from car_marketplace.domain.test_drive import BookingStatus, TestDriveBooking
from car_marketplace.domain.user import User
from car_marketplace.entrypoints.http.dependencies import (
    get_car_by_id_use_case,
    get_car_filters_use_case,
    get_search_catalog_use_case,
    get_toggle_saved_car_use_case,
)
from car_marketplace.entrypoints.http.exception_handlers import register_exception_handlers
from car_marketplace.entrypoints.http.routes.cars import router
from car_marketplace.infra.config import Settings, get_settings
from car_marketplace.ports.cache_invalidator import SAVED_CARS_PATH, CacheInvalidator
from car_marketplace.ports.saved_car_repository import SavedCarRepository
from car_marketplace.use_cases.get_car_by_id import GetCarById
from car_marketplace.use_cases.get_car_filters import GetCarFilters
from car_marketplace.use_cases.search_car_catalog import SearchCarCatalog
from car_marketplace.use_cases.toggle_saved_car import ToggleSavedCar

ALICE = {"X-User-Id": "auth|alice"}
BASE_TIME = datetime(2025, 3, 1, tzinfo=timezone.utc)


def make_car(car_id: str, make: str, model: str, price: str, minutes: int = 0) -> Car:
    return Car(
        id=car_id,
        make=make,
        model=model,
        year=2022,
        price=Decimal(price),
        fuel_type="Gasoline",
        transmission="Automatic",
        body_type="Sedan",
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


@pytest.fixture
def catalog() -> InMemoryCarCatalogRepository:
    return InMemoryCarCatalogRepository(list(DEMO_CARS))


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository([User(id="user-1", external_auth_id="auth|alice")])


@pytest.fixture
def saved_cars(catalog: InMemoryCarCatalogRepository) -> InMemorySavedCarRepository:
    ticks = itertools.count()
    return InMemorySavedCarRepository(
        car_lookup=catalog.get_by_id,
        clock=lambda: BASE_TIME + timedelta(minutes=next(ticks)),
    )


@pytest.fixture
def bookings() -> InMemoryTestDriveRepository:
    return InMemoryTestDriveRepository(
        [
            TestDriveBooking(
                id="booking-1",
                car_id="2",
                user_id="user-1",
                booking_date=date(2025, 6, 14),
                start_time="10:00",
                end_time="10:30",
                status=BookingStatus.CONFIRMED,
                created_at=BASE_TIME,
            )
        ]
    )


@pytest.fixture
def cache() -> Mock:
    return Mock(spec=CacheInvalidator)


@pytest.fixture
def app(
    catalog: InMemoryCarCatalogRepository,
    users: InMemoryUserRepository,
    saved_cars: InMemorySavedCarRepository,
    bookings: InMemoryTestDriveRepository,
    cache: Mock,
) -> FastAPI:
    """Cars router with exception handlers and in-memory use cases."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")

    test_app.dependency_overrides[get_settings] = lambda: Settings()
    wire_catalog(test_app, catalog, users, saved_cars)
    test_app.dependency_overrides[get_car_by_id_use_case] = lambda: GetCarById(
        car_catalog_repository=catalog,
        user_repository=users,
        saved_car_repository=saved_cars,
        test_drive_repository=bookings,
        dealership_repository=InMemoryDealershipRepository(DEMO_DEALERSHIP),
    )
    test_app.dependency_overrides[get_toggle_saved_car_use_case] = lambda: ToggleSavedCar(
        car_catalog_repository=catalog,
        user_repository=users,
        saved_car_repository=saved_cars,
        cache_invalidator=cache,
    )
    return test_app


def wire_catalog(
    app: FastAPI,
    catalog,
    users: InMemoryUserRepository,
    saved_cars: SavedCarRepository,
) -> None:
    app.dependency_overrides[get_car_filters_use_case] = lambda: GetCarFilters(
        car_catalog_repository=catalog
    )
    app.dependency_overrides[get_search_catalog_use_case] = lambda: SearchCarCatalog(
        car_catalog_repository=catalog,
        user_repository=users,
        saved_car_repository=saved_cars,
    )


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app, raise_server_exceptions=False)


def ids(response) -> list[str]:
    return [car["id"] for car in response.json()["data"]]


# ==============================================================================
# GET /v1/cars/filters
# ==============================================================================


def test_filters_come_from_available_inventory(client: TestClient) -> None:
    response = client.get("/v1/cars/filters")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "pagination" not in body
    assert body["data"]["makes"] == ["BMW", "Ford", "Honda", "Hyundai", "Mahindra", "Tata"]
    assert body["data"]["bodyTypes"] == ["Convertible", "Hatchback", "SUV", "Sedan"]
    assert body["data"]["fuelTypes"] == ["Diesel", "Electric", "Gasoline", "Hybrid"]
    assert body["data"]["transmissions"] == ["Automatic", "Manual"]
    assert body["data"]["priceRange"] == {"min": 8900.0, "max": 54000.0}


def test_filters_fall_back_when_catalog_fails(
    app: FastAPI, client: TestClient, users: InMemoryUserRepository, saved_cars
) -> None:
    broken = Mock()
    broken.filter_options.side_effect = RuntimeError("connection refused")
    wire_catalog(app, broken, users, saved_cars)

    response = client.get("/v1/cars/filters")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["makes"] == ["Hyundai", "Honda", "BMW", "Tata", "Mahindra", "Ford"]
    assert body["data"]["priceRange"] == {"min": 0.0, "max": 100000.0}


def test_filters_route_is_not_captured_by_car_id(client: TestClient) -> None:
    response = client.get("/v1/cars/filters")

    assert "error" not in response.json()


# ==============================================================================
# GET /v1/cars
# ==============================================================================


def test_search_defaults_to_newest_first_page_of_six(client: TestClient) -> None:
    response = client.get("/v1/cars")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert ids(response) == ["8", "7", "6", "5", "4", "3"]
    assert body["pagination"] == {"total": 8, "page": 1, "limit": 6, "pages": 2}


def test_search_serializes_cars_with_camel_case_keys(client: TestClient) -> None:
    response = client.get("/v1/cars", params={"make": "BMW"})

    car = response.json()["data"][0]
    assert car["id"] == "3"
    assert car["price"] == 54000.0
    assert car["fuelType"] == "Gasoline"
    assert car["bodyType"] == "Convertible"
    assert car["status"] == "AVAILABLE"
    assert car["createdAt"] == "2025-01-03T09:00:00+00:00"
    assert car["wishlisted"] is False
    assert "body_type" not in car


def test_search_with_filters_and_price_sort(client: TestClient) -> None:
    response = client.get(
        "/v1/cars",
        params={"bodyType": "SUV", "minPrice": "18000", "sortBy": "priceDesc"},
    )

    assert ids(response) == ["5", "1"]
    assert response.json()["pagination"]["total"] == 2


def test_search_text_is_case_insensitive(client: TestClient) -> None:
    response = client.get("/v1/cars", params={"search": "  hyundai "})

    assert sorted(ids(response)) == ["1", "8"]


def test_unknown_sort_falls_back_to_newest(client: TestClient) -> None:
    response = client.get("/v1/cars", params={"sortBy": "cheapest", "limit": 3})

    assert ids(response) == ["8", "7", "6"]


@pytest.mark.parametrize("max_price", ["0", str(2**53 - 1)])
def test_zero_or_sentinel_max_price_is_unbounded(client: TestClient, max_price: str) -> None:
    response = client.get("/v1/cars", params={"maxPrice": max_price, "limit": 50})

    assert response.json()["pagination"]["total"] == 8


def test_honda_pagination_scenario(
    app: FastAPI, client: TestClient, users: InMemoryUserRepository
) -> None:
    prices = ["30000", "12000", "18000", "9000", "25000", "15000", "21000", "11000"]
    cars = [make_car(str(i + 1), "Honda", f"Model {i}", price, minutes=i) for i, price in enumerate(prices)]
    cars.append(make_car("99", "BMW", "X5", "8000"))
    catalog = InMemoryCarCatalogRepository(cars)
    wire_catalog(app, catalog, users, InMemorySavedCarRepository(car_lookup=catalog.get_by_id))

    first = client.get("/v1/cars", params={"make": "Honda", "sortBy": "priceAsc", "page": 1, "limit": 6})
    second = client.get("/v1/cars", params={"make": "Honda", "sortBy": "priceAsc", "page": 2, "limit": 6})

    assert [car["price"] for car in first.json()["data"]] == [9000, 11000, 12000, 15000, 18000, 21000]
    assert first.json()["pagination"] == {"total": 8, "page": 1, "limit": 6, "pages": 2}
    assert [car["price"] for car in second.json()["data"]] == [25000, 30000]
    assert second.json()["pagination"]["page"] == 2


def test_page_past_the_end_is_empty_with_total(client: TestClient) -> None:
    response = client.get("/v1/cars", params={"page": 9})

    body = response.json()
    assert body["data"] == []
    assert body["pagination"] == {"total": 8, "page": 9, "limit": 6, "pages": 2}


def test_search_marks_cars_saved_by_the_caller(
    client: TestClient, saved_cars: InMemorySavedCarRepository
) -> None:
    saved_cars.toggle("user-1", "2")

    mine = client.get("/v1/cars", params={"limit": 50}, headers=ALICE)
    anonymous = client.get("/v1/cars", params={"limit": 50})

    assert [car["id"] for car in mine.json()["data"] if car["wishlisted"]] == ["2"]
    assert not any(car["wishlisted"] for car in anonymous.json()["data"])


def test_search_failure_serves_empty_page(
    app: FastAPI, client: TestClient, users: InMemoryUserRepository, saved_cars
) -> None:
    broken = Mock()
    broken.search.side_effect = RuntimeError("statement timeout")
    wire_catalog(app, broken, users, saved_cars)

    response = client.get("/v1/cars", params={"page": 2, "limit": 10})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": [],
        "pagination": {"total": 0, "page": 2, "limit": 10, "pages": 0},
    }


# ==============================================================================
# GET /v1/cars - Validation
# ==============================================================================


@pytest.mark.parametrize(
    "params, field",
    [
        ({"limit": 500}, "limit"),
        ({"limit": 0}, "limit"),
        ({"page": 0}, "page"),
        ({"minPrice": "abc"}, "minPrice"),
        ({"minPrice": "-1"}, "minPrice"),
    ],
)
def test_invalid_query_parameters_return_422(client: TestClient, params: dict, field: str) -> None:
    response = client.get("/v1/cars", params=params)

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "VALIDATION_ERROR"
    assert body["errors"][0]["field"] == field


def test_inverted_price_range_is_an_empty_page(client: TestClient) -> None:
    response = client.get("/v1/cars", params={"minPrice": "30000", "maxPrice": "20000"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": [],
        "pagination": {"total": 0, "page": 1, "limit": 6, "pages": 0},
    }


# ==============================================================================
# GET /v1/cars/{car_id}
# ==============================================================================


def test_car_detail_for_anonymous_caller(client: TestClient) -> None:
    response = client.get("/v1/cars/2")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    car = body["data"]
    assert car["model"] == "City"
    assert car["wishlisted"] is False
    assert car["testDriveInfo"]["userTestDrive"] is None
    dealership = car["testDriveInfo"]["dealership"]
    assert dealership["name"] == "Demo Motors"
    assert [hour["dayOfWeek"] for hour in dealership["workingHours"]][0] == "MONDAY"
    assert dealership["workingHours"][-1]["isOpen"] is False


def test_car_detail_includes_callers_booking_and_wishlist(
    client: TestClient, saved_cars: InMemorySavedCarRepository
) -> None:
    saved_cars.toggle("user-1", "2")

    response = client.get("/v1/cars/2", headers=ALICE)

    car = response.json()["data"]
    assert car["wishlisted"] is True
    assert car["testDriveInfo"]["userTestDrive"] == {
        "id": "booking-1",
        "status": "CONFIRMED",
        "bookingDate": "2025-06-14",
    }


def test_unknown_car_is_a_soft_failure(client: TestClient) -> None:
    response = client.get("/v1/cars/does-not-exist")

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Car not found"}


# ==============================================================================
# POST /v1/cars/{car_id}/save
# ==============================================================================


def test_toggle_adds_then_removes(
    client: TestClient, saved_cars: InMemorySavedCarRepository, cache: Mock
) -> None:
    added = client.post("/v1/cars/2/save", headers=ALICE)
    removed = client.post("/v1/cars/2/save", headers=ALICE)

    assert added.status_code == 200
    assert added.json() == {"success": True, "saved": True, "message": "Car added to favorites"}
    assert removed.json() == {"success": True, "saved": False, "message": "Car removed from favorites"}
    assert saved_cars.saved_car_ids("user-1") == set()
    assert cache.invalidate.call_count == 2
    cache.invalidate.assert_called_with(SAVED_CARS_PATH)


def test_toggle_without_identity_is_unauthorized(client: TestClient, cache: Mock) -> None:
    response = client.post("/v1/cars/2/save")

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "Error toggling saved car: Unauthorized",
        "code": "UNAUTHORIZED",
    }
    cache.invalidate.assert_not_called()


def test_toggle_with_blank_identity_is_unauthorized(client: TestClient) -> None:
    response = client.post("/v1/cars/2/save", headers={"X-User-Id": "   "})

    assert response.status_code == 401


def test_toggle_for_identity_without_account(client: TestClient) -> None:
    response = client.post("/v1/cars/2/save", headers={"X-User-Id": "auth|ghost"})

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Error toggling saved car: User not found",
        "code": "NOT_FOUND",
    }


def test_toggle_unknown_car_writes_nothing(
    client: TestClient, saved_cars: InMemorySavedCarRepository, cache: Mock
) -> None:
    response = client.post("/v1/cars/nope/save", headers=ALICE)

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Car not found"}
    assert saved_cars.saved_car_ids("user-1") == set()
    cache.invalidate.assert_not_called()


def test_toggle_storage_failure_is_a_500(
    app: FastAPI,
    client: TestClient,
    catalog: InMemoryCarCatalogRepository,
    users: InMemoryUserRepository,
    cache: Mock,
) -> None:
    broken = Mock(spec=SavedCarRepository)
    broken.toggle.side_effect = RuntimeError("deadlock detected")
    app.dependency_overrides[get_toggle_saved_car_use_case] = lambda: ToggleSavedCar(
        car_catalog_repository=catalog,
        user_repository=users,
        saved_car_repository=broken,
        cache_invalidator=cache,
    )

    response = client.post("/v1/cars/2/save", headers=ALICE)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Error toggling saved car: deadlock detected",
        "code": "INTERNAL_ERROR",
    }
    cache.invalidate.assert_not_called()


def test_toggle_is_post_only(client: TestClient) -> None:
    response = client.get("/v1/cars/2/save", headers=ALICE)

    assert response.status_code == 405
