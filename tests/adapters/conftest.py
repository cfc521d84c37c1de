"""SQLite in-memory database shared by the SQLAlchemy adapter tests."""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from car_marketplace.domain.car import CarStatus
from car_marketplace.infra.db.models import Base, CarRow, UserRow

BASE_TIME = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sqlite_engine():
    """Create SQLite in-memory engine with every table."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(sqlite_engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=sqlite_engine, expire_on_commit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _add_car(
    session: Session,
    make: str,
    model: str,
    price: str,
    *,
    minutes: int = 0,
    status: CarStatus = CarStatus.AVAILABLE,
    **overrides,
) -> CarRow:
    """Insert a car listed ``minutes`` after BASE_TIME."""
    listed_at = BASE_TIME + timedelta(minutes=minutes)
    fields = {
        "id": uuid.uuid4(),
        "make": make,
        "model": model,
        "year": 2022,
        "price": Decimal(price),
        "mileage": 10000,
        "color": "White",
        "fuel_type": "Gasoline",
        "transmission": "Automatic",
        "body_type": "Sedan",
        "seats": 5,
        "description": f"{make} {model}",
        "status": status,
        "featured": False,
        "images": [],
        "created_at": listed_at,
        "updated_at": listed_at,
    }
    fields.update(overrides)
    row = CarRow(**fields)
    session.add(row)
    session.flush()
    return row


def _add_user(session: Session, external_auth_id: str = "auth|alice") -> UserRow:
    row = UserRow(id=uuid.uuid4(), external_auth_id=external_auth_id, email="alice@example.com")
    session.add(row)
    session.flush()
    return row


@pytest.fixture
def add_car(session: Session):
    """Factory fixture: ``add_car("Honda", "City", "14900", minutes=5)``."""
    return lambda *args, **kwargs: _add_car(session, *args, **kwargs)


@pytest.fixture
def add_user(session: Session):
    return lambda *args, **kwargs: _add_user(session, *args, **kwargs)
