"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Only stateless singletons should use lru_cache.

Demo mode swaps every repository for an in-memory one over the fixture
catalog. In that mode no session is opened at all.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Generator

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from car_marketplace.adapters.after_commit_cache_invalidator import AfterCommitCacheInvalidator
from car_marketplace.adapters.in_memory_car_catalog_repository import (
    InMemoryCarCatalogRepository,
)
from car_marketplace.adapters.in_memory_dealership_repository import (
    InMemoryDealershipRepository,
)
from car_marketplace.adapters.in_memory_saved_car_repository import (
    InMemorySavedCarRepository,
)
from car_marketplace.adapters.in_memory_test_drive_repository import (
    InMemoryTestDriveRepository,
)
from car_marketplace.adapters.in_memory_user_repository import InMemoryUserRepository
from car_marketplace.adapters.logging_cache_invalidator import LoggingCacheInvalidator
from car_marketplace.adapters.postgres_car_catalog_repository import (
    PostgresCarCatalogRepository,
)
from car_marketplace.adapters.postgres_dealership_repository import (
    PostgresDealershipRepository,
)
from car_marketplace.adapters.postgres_saved_car_repository import (
    PostgresSavedCarRepository,
)
from car_marketplace.adapters.postgres_test_drive_repository import (
    PostgresTestDriveRepository,
)
from car_marketplace.adapters.postgres_user_repository import PostgresUserRepository
from car_marketplace.adapters.redis_cache_invalidator import RedisCacheInvalidator
from car_marketplace.demo.fixtures import DEMO_CARS, DEMO_DEALERSHIP
from car_marketplace.domain.car import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from car_marketplace.domain.user import CallerIdentity
from car_marketplace.entrypoints.http.dtos.catalog_search import CarsSearchQueryDTO
from car_marketplace.infra.config import Settings, get_settings
from car_marketplace.infra.db.session import get_session
from car_marketplace.ports.cache_invalidator import CacheInvalidator
from car_marketplace.ports.car_catalog_repository import CarCatalogRepository
from car_marketplace.ports.dealership_repository import DealershipRepository
from car_marketplace.ports.saved_car_repository import SavedCarRepository
from car_marketplace.ports.test_drive_repository import TestDriveRepository
from car_marketplace.ports.user_repository import UserRepository
from car_marketplace.use_cases.get_car_by_id import GetCarById
from car_marketplace.use_cases.get_car_filters import GetCarFilters
from car_marketplace.use_cases.get_saved_cars import GetSavedCars
from car_marketplace.use_cases.search_car_catalog import SearchCarCatalog
from car_marketplace.use_cases.toggle_saved_car import ToggleSavedCar


def get_db(settings: Settings = Depends(get_settings)) -> Generator[Session | None, None, None]:
    """
    Provides a database session for a single request.

    FastAPI will:
    1. Call this function when a request starts
    2. Inject the session into the repository factories
    3. Commit/rollback and close the session when the request ends

    Yields:
        Session: SQLAlchemy database session (per-request), or None in demo mode
    """
    if settings.demo_mode:
        yield None
        return

    with get_session() as session:
        yield session


# ==============================================================================
# Caller identity
# ==============================================================================


def get_caller_identity(
    request: Request, settings: Settings = Depends(get_settings)
) -> CallerIdentity | None:
    """Identity from the auth header; a missing or blank header is an anonymous caller."""
    external_auth_id = request.headers.get(settings.auth_header, "").strip()
    if not external_auth_id:
        return None
    return CallerIdentity(external_auth_id=external_auth_id)


# ==============================================================================
# Query parameters
# ==============================================================================


def get_cars_search_query(
    search: str = Query(default="", description="Text matched against make, model, description"),
    make: str = Query(default=""),
    body_type: str = Query(default="", alias="bodyType"),
    fuel_type: str = Query(default="", alias="fuelType"),
    transmission: str = Query(default=""),
    min_price: Decimal = Query(default=Decimal("0"), alias="minPrice", ge=0),
    max_price: Decimal | None = Query(default=None, alias="maxPrice", ge=0),
    sort_by: str = Query(default="newest", alias="sortBy"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> CarsSearchQueryDTO:
    """Reads the camelCase query string into CarsSearchQueryDTO."""
    return CarsSearchQueryDTO(
        search=search,
        make=make,
        body_type=body_type,
        fuel_type=fuel_type,
        transmission=transmission,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        page=page,
        limit=limit,
    )


# ==============================================================================
# Demo adapters (stateless singletons over fixtures)
# ==============================================================================


@lru_cache
def _demo_catalog() -> InMemoryCarCatalogRepository:
    return InMemoryCarCatalogRepository(cars=list(DEMO_CARS))


@lru_cache
def _demo_saved_cars() -> InMemorySavedCarRepository:
    return InMemorySavedCarRepository(car_lookup=_demo_catalog().get_by_id)


# ==============================================================================
# Repositories
# ==============================================================================


def get_car_catalog_repository(
    settings: Settings = Depends(get_settings), db: Session | None = Depends(get_db)
) -> CarCatalogRepository:
    if settings.demo_mode or db is None:
        return _demo_catalog()
    return PostgresCarCatalogRepository(session=db)


def get_user_repository(
    settings: Settings = Depends(get_settings), db: Session | None = Depends(get_db)
) -> UserRepository:
    # Demo mode has no accounts: every caller is anonymous to the catalog
    if settings.demo_mode or db is None:
        return InMemoryUserRepository()
    return PostgresUserRepository(session=db)


def get_saved_car_repository(
    settings: Settings = Depends(get_settings), db: Session | None = Depends(get_db)
) -> SavedCarRepository:
    if settings.demo_mode or db is None:
        return _demo_saved_cars()
    return PostgresSavedCarRepository(session=db)


def get_test_drive_repository(
    settings: Settings = Depends(get_settings), db: Session | None = Depends(get_db)
) -> TestDriveRepository:
    if settings.demo_mode or db is None:
        return InMemoryTestDriveRepository()
    return PostgresTestDriveRepository(session=db)


def get_dealership_repository(
    settings: Settings = Depends(get_settings), db: Session | None = Depends(get_db)
) -> DealershipRepository:
    if settings.demo_mode or db is None:
        return InMemoryDealershipRepository(DEMO_DEALERSHIP)
    return PostgresDealershipRepository(session=db)


# Redis invalidators handed out by _build_cache_invalidator, closed on shutdown
_open_redis_invalidators: list[RedisCacheInvalidator] = []


@lru_cache
def _build_cache_invalidator(backend: str, redis_url: str, channel: str) -> CacheInvalidator:
    if backend == "redis":
        invalidator = RedisCacheInvalidator(redis_url=redis_url, channel=channel)
        _open_redis_invalidators.append(invalidator)
        return invalidator
    return LoggingCacheInvalidator()


def _shared_cache_invalidator(settings: Settings) -> CacheInvalidator:
    """Shared invalidator; the Redis client is reused across requests."""
    return _build_cache_invalidator(
        settings.cache_invalidation_backend.lower(),
        settings.redis_url,
        settings.cache_invalidation_channel,
    )


def get_cache_invalidator(
    settings: Settings = Depends(get_settings), db: Session | None = Depends(get_db)
) -> CacheInvalidator:
    """Signals go out only after the request session commits."""
    shared = _shared_cache_invalidator(settings)
    if db is None:
        return shared
    return AfterCommitCacheInvalidator(session=db, target=shared)


def close_cache_invalidator() -> None:
    """Release the shared invalidator's connection; called on application shutdown."""
    while _open_redis_invalidators:
        _open_redis_invalidators.pop().close()
    _build_cache_invalidator.cache_clear()


# ==============================================================================
# Use cases
# ==============================================================================


def get_car_filters_use_case(
    settings: Settings = Depends(get_settings),
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> GetCarFilters:
    return GetCarFilters(
        car_catalog_repository=repository,
        demo_mode=settings.demo_mode,
        fallback_on_error=settings.filters_fallback_on_error,
    )


def get_search_catalog_use_case(
    settings: Settings = Depends(get_settings),
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
    users: UserRepository = Depends(get_user_repository),
    saved_cars: SavedCarRepository = Depends(get_saved_car_repository),
) -> SearchCarCatalog:
    """
    Factory function that returns a configured SearchCarCatalog use case.

    This function is called per-request, ensuring each request gets:
    - Fresh repository instances
    - Fresh use case instance
    - Isolated database session
    """
    return SearchCarCatalog(
        car_catalog_repository=repository,
        user_repository=users,
        saved_car_repository=saved_cars,
        fail_soft=settings.search_fail_soft,
    )


def get_car_by_id_use_case(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
    users: UserRepository = Depends(get_user_repository),
    saved_cars: SavedCarRepository = Depends(get_saved_car_repository),
    test_drives: TestDriveRepository = Depends(get_test_drive_repository),
    dealerships: DealershipRepository = Depends(get_dealership_repository),
) -> GetCarById:
    return GetCarById(
        car_catalog_repository=repository,
        user_repository=users,
        saved_car_repository=saved_cars,
        test_drive_repository=test_drives,
        dealership_repository=dealerships,
    )


def get_toggle_saved_car_use_case(
    settings: Settings = Depends(get_settings),
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
    users: UserRepository = Depends(get_user_repository),
    saved_cars: SavedCarRepository = Depends(get_saved_car_repository),
    cache_invalidator: CacheInvalidator = Depends(get_cache_invalidator),
) -> ToggleSavedCar:
    return ToggleSavedCar(
        car_catalog_repository=repository,
        user_repository=users,
        saved_car_repository=saved_cars,
        cache_invalidator=cache_invalidator,
        demo_mode=settings.demo_mode,
    )


def get_saved_cars_use_case(
    users: UserRepository = Depends(get_user_repository),
    saved_cars: SavedCarRepository = Depends(get_saved_car_repository),
) -> GetSavedCars:
    return GetSavedCars(user_repository=users, saved_car_repository=saved_cars)
