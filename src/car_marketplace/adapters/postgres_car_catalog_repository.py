"""PostgreSQL implementation of CarCatalogRepository."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from car_marketplace.domain.car import (
    Car,
    CarStatus,
    CatalogFilters,
    FilterOptions,
    Paging,
    PriceRange,
    SortOrder,
)
from car_marketplace.infra.db.models.car import CarRow
from car_marketplace.ports.car_catalog_repository import CarCatalogRepository, SearchResult

if TYPE_CHECKING:
    from sqlalchemy.orm import InstrumentedAttribute
    from sqlalchemy.sql import Select

DEFAULT_MAX_PRICE = Decimal("100000")


class PostgresCarCatalogRepository(CarCatalogRepository):
    """
    PostgreSQL implementation of CarCatalogRepository.

    - Uses SQLAlchemy ORM for database access
    - Applies filters using SQL WHERE clauses
    - Returns the page and total_count from one statement via COUNT(*) OVER ()
    - Converts CarRow (infrastructure) to Car (domain)
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self._session = session

    def filter_options(self) -> FilterOptions:
        price_min, price_max = self._session.execute(
            select(func.min(CarRow.price), func.max(CarRow.price)).where(
                CarRow.status == CarStatus.AVAILABLE
            )
        ).one()

        return FilterOptions(
            makes=self._distinct_values(CarRow.make),
            body_types=self._distinct_values(CarRow.body_type),
            fuel_types=self._distinct_values(CarRow.fuel_type),
            transmissions=self._distinct_values(CarRow.transmission),
            price_range=PriceRange(
                min=Decimal(str(price_min)) if price_min is not None else Decimal("0"),
                max=Decimal(str(price_max)) if price_max is not None else DEFAULT_MAX_PRICE,
            ),
        )

    def search(self, filters: CatalogFilters, sort: SortOrder, paging: Paging) -> SearchResult:
        """
        Search catalog with filters, ordering and paging.

        The page rows carry the window total, so count and page come from
        the same snapshot. When the page is past the end there are no rows to
        carry it and a plain COUNT is issued instead.

        Args:
            filters: Filter criteria - must be pre-validated
            sort: Result ordering
            paging: Pagination parameters - must be pre-validated

        Returns:
            SearchResult with cars and total_count
        """
        query = self._build_query(filters)

        page_query = (
            query.add_columns(func.count().over().label("total_count"))
            .order_by(*self._order_by(sort))
            .offset(paging.offset)
            .limit(paging.limit)
        )
        rows = self._session.execute(page_query).all()

        if rows:
            total_count = rows[0].total_count
        else:
            count_query = select(func.count()).select_from(query.subquery())
            total_count = self._session.execute(count_query).scalar() or 0

        cars = [self._to_domain(row[0]) for row in rows]
        return SearchResult(cars=cars, total_count=total_count)

    def get_by_id(self, car_id: str) -> Car | None:
        """
        Get car by ID.

        Args:
            car_id: Car ID (expected to be a valid UUID string)

        Returns:
            Car entity if found, None otherwise
        """
        try:
            key = UUID(car_id)
        except ValueError:  # Invalid UUID format
            return None

        row = self._session.get(CarRow, key)
        return self._to_domain(row) if row else None

    def _distinct_values(self, column: InstrumentedAttribute[str]) -> list[str]:
        query = (
            select(column)
            .where(CarRow.status == CarStatus.AVAILABLE)
            .distinct()
            .order_by(column.asc())
        )
        return list(self._session.execute(query).scalars().all())

    def _build_query(self, filters: CatalogFilters) -> Select[tuple[CarRow]]:
        """
        Build SQLAlchemy query with filters applied.

        Args:
            filters: Filter criteria to apply

        Returns:
            SQLAlchemy select statement with WHERE clauses
        """
        query = select(CarRow).where(CarRow.status == CarStatus.AVAILABLE)

        # Free-text search: case-insensitive substring on make, model or description
        if filters.search:
            # autoescape keeps % and _ in user input literal
            query = query.where(
                or_(
                    CarRow.make.icontains(filters.search, autoescape=True),
                    CarRow.model.icontains(filters.search, autoescape=True),
                    CarRow.description.icontains(filters.search, autoescape=True),
                )
            )

        if filters.make:
            query = query.where(CarRow.make == filters.make)
        if filters.body_type:
            query = query.where(CarRow.body_type == filters.body_type)
        if filters.fuel_type:
            query = query.where(CarRow.fuel_type == filters.fuel_type)
        if filters.transmission:
            query = query.where(CarRow.transmission == filters.transmission)

        query = query.where(CarRow.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.where(CarRow.price <= filters.max_price)

        return query

    @staticmethod
    def _order_by(sort: SortOrder) -> tuple:
        if sort is SortOrder.PRICE_ASC:
            return (CarRow.price.asc(), CarRow.id.asc())
        if sort is SortOrder.PRICE_DESC:
            return (CarRow.price.desc(), CarRow.id.asc())
        return (CarRow.created_at.desc(), CarRow.id.asc())

    @staticmethod
    def _to_domain(row: CarRow) -> Car:
        return car_row_to_domain(row)


def car_row_to_domain(row: CarRow) -> Car:
    """
    Convert database model (CarRow) to domain entity (Car).

    Args:
        row: SQLAlchemy CarRow model

    Returns:
        Car domain entity
    """
    return Car(
        id=str(row.id),  # Convert UUID to string
        make=row.make,
        model=row.model,
        year=row.year,
        price=row.price,  # Already Decimal from NUMERIC column
        mileage=row.mileage,
        color=row.color,
        fuel_type=row.fuel_type,
        transmission=row.transmission,
        body_type=row.body_type,
        seats=row.seats,
        description=row.description,
        status=row.status,
        featured=row.featured,
        images=tuple(row.images or ()),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
