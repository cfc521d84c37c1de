from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from car_marketplace.infra.db.models.base import Base
from car_marketplace.infra.db.models.car import CarRow


class SavedCarRow(Base):
    """Wishlist entry; the composite primary key allows one row per (user, car)."""

    __tablename__ = "user_saved_cars"
    __table_args__ = (Index("ix_user_saved_cars_user_saved_at", "user_id", "saved_at"),)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    car_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("cars.id", ondelete="CASCADE"),
        primary_key=True,
    )
    saved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    car: Mapped[CarRow] = relationship(CarRow, lazy="joined")
