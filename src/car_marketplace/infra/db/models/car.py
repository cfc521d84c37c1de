from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, Boolean, DateTime, Enum, Index, Integer, Numeric, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from car_marketplace.domain.car import CarStatus
from car_marketplace.infra.db.models.base import Base


class CarRow(Base):
    __tablename__ = "cars"
    __table_args__ = (
        Index("ix_cars_status_created_at", "status", "created_at"),
        Index("ix_cars_status_price", "status", "price"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    make: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    model: Mapped[str] = mapped_column(String(50), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2), nullable=False
    )  # $9,999,999,999.99

    mileage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    color: Mapped[str] = mapped_column(String(30), nullable=False, default="")
    fuel_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    transmission: Mapped[str] = mapped_column(String(20), nullable=False)
    body_type: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    seats: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[CarStatus] = mapped_column(
        Enum(CarStatus, name="car_status"),
        nullable=False,
        default=CarStatus.AVAILABLE,
    )
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
