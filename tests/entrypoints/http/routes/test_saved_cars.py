"""Tests for GET /v1/saved-cars."""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from car_marketplace.adapters.in_memory_car_catalog_repository import InMemoryCarCatalogRepository
from car_marketplace.adapters.in_memory_saved_car_repository import InMemorySavedCarRepository
from car_marketplace.adapters.in_memory_user_repository import InMemoryUserRepository
from car_marketplace.demo.fixtures import DEMO_CARS
from car_marketplace.domain.user import User
from car_marketplace.entrypoints.http.dependencies import get_saved_cars_use_case
from car_marketplace.entrypoints.http.exception_handlers import register_exception_handlers
from car_marketplace.entrypoints.http.routes.saved_cars import router
from car_marketplace.infra.config import Settings, get_settings
from car_marketplace.ports.saved_car_repository import SavedCarRepository
from car_marketplace.use_cases.get_saved_cars import GetSavedCars

ALICE = {"X-User-Id": "auth|alice"}


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository([User(id="user-1", external_auth_id="auth|alice")])


@pytest.fixture
def saved_cars() -> InMemorySavedCarRepository:
    catalog = InMemoryCarCatalogRepository(list(DEMO_CARS))
    ticks = itertools.count()
    start = datetime(2025, 3, 1, tzinfo=timezone.utc)
    return InMemorySavedCarRepository(
        car_lookup=catalog.get_by_id,
        clock=lambda: start + timedelta(minutes=next(ticks)),
    )


@pytest.fixture
def app(users: InMemoryUserRepository, saved_cars: InMemorySavedCarRepository) -> FastAPI:
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    test_app.dependency_overrides[get_settings] = lambda: Settings()
    test_app.dependency_overrides[get_saved_cars_use_case] = lambda: GetSavedCars(
        user_repository=users, saved_car_repository=saved_cars
    )
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


def test_saved_cars_most_recent_first(
    client: TestClient, saved_cars: InMemorySavedCarRepository
) -> None:
    saved_cars.toggle("user-1", "3")
    saved_cars.toggle("user-1", "6")

    response = client.get("/v1/saved-cars", headers=ALICE)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [car["id"] for car in body["data"]] == ["6", "3"]
    assert all(car["wishlisted"] for car in body["data"])
    assert "pagination" not in body


def test_saved_cars_empty_wishlist(client: TestClient) -> None:
    response = client.get("/v1/saved-cars", headers=ALICE)

    assert response.json() == {"success": True, "data": []}


def test_saved_cars_anonymous_is_soft_unauthorized(client: TestClient) -> None:
    response = client.get("/v1/saved-cars")

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Unauthorized"}


def test_saved_cars_identity_without_account(client: TestClient) -> None:
    response = client.get("/v1/saved-cars", headers={"X-User-Id": "auth|ghost"})

    assert response.json() == {"success": False, "error": "User not found"}


def test_saved_cars_storage_failure_is_soft(
    app: FastAPI, client: TestClient, users: InMemoryUserRepository
) -> None:
    broken = Mock(spec=SavedCarRepository)
    broken.list_saved.side_effect = RuntimeError("connection reset")
    app.dependency_overrides[get_saved_cars_use_case] = lambda: GetSavedCars(
        user_repository=users, saved_car_repository=broken
    )

    response = client.get("/v1/saved-cars", headers=ALICE)

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "connection reset"}
