"""Initial marketplace schema

Revision ID: 0001
Revises:
Create Date: 2026-10-16 10:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

car_status = sa.Enum("AVAILABLE", "UNAVAILABLE", "SOLD", name="car_status")
user_role = sa.Enum("USER", "ADMIN", name="user_role")
booking_status = sa.Enum(
    "PENDING", "CONFIRMED", "COMPLETED", "CANCELLED", "NO_SHOW", name="booking_status"
)
day_of_week = sa.Enum(
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
    name="day_of_week",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "cars",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("make", sa.String(50), nullable=False),
        sa.Column("model", sa.String(50), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False),
        sa.Column("color", sa.String(30), nullable=False),
        sa.Column("fuel_type", sa.String(20), nullable=False),
        sa.Column("transmission", sa.String(20), nullable=False),
        sa.Column("body_type", sa.String(30), nullable=False),
        sa.Column("seats", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", car_status, nullable=False),
        sa.Column("featured", sa.Boolean(), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_cars_make", "cars", ["make"])
    op.create_index("ix_cars_fuel_type", "cars", ["fuel_type"])
    op.create_index("ix_cars_body_type", "cars", ["body_type"])
    op.create_index("ix_cars_status_created_at", "cars", ["status", "created_at"])
    op.create_index("ix_cars_status_price", "cars", ["status", "price"])

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("external_auth_id", sa.String(100), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("role", user_role, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "user_saved_cars",
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "car_id",
            sa.Uuid(),
            sa.ForeignKey("cars.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("saved_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(
        "ix_user_saved_cars_user_saved_at", "user_saved_cars", ["user_id", "saved_at"]
    )

    op.create_table(
        "test_drive_bookings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("car_id", sa.Uuid(), sa.ForeignKey("cars.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("end_time", sa.String(5), nullable=False),
        sa.Column("status", booking_status, nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_test_drive_bookings_user_car", "test_drive_bookings", ["user_id", "car_id"]
    )

    op.create_table(
        "dealership_info",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(30), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "working_hours",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "dealership_id",
            sa.Uuid(),
            sa.ForeignKey("dealership_info.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("day_of_week", day_of_week, nullable=False),
        sa.Column("open_time", sa.String(5), nullable=False),
        sa.Column("close_time", sa.String(5), nullable=False),
        sa.Column("is_open", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("dealership_id", "day_of_week", name="uq_working_hours_dealership_day"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("working_hours")
    op.drop_table("dealership_info")
    op.drop_index("ix_test_drive_bookings_user_car", table_name="test_drive_bookings")
    op.drop_table("test_drive_bookings")
    op.drop_index("ix_user_saved_cars_user_saved_at", table_name="user_saved_cars")
    op.drop_table("user_saved_cars")
    op.drop_table("users")
    for index in (
        "ix_cars_status_price",
        "ix_cars_status_created_at",
        "ix_cars_body_type",
        "ix_cars_fuel_type",
        "ix_cars_make",
    ):
        op.drop_index(index, table_name="cars")
    op.drop_table("cars")

    bind = op.get_bind()
    for enum_type in (day_of_week, booking_status, user_role, car_status):
        enum_type.drop(bind, checkfirst=True)
