"""Initial hotel, menu, booking, and order schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    user_role_enum = sa.Enum("ADMIN", "MANAGER", "STAFF", "GUEST", name="userrole")
    user_status_enum = sa.Enum("INVITED", "ACTIVE", "SUSPENDED", name="userstatus")
    room_status_enum = sa.Enum("VACANT", "OCCUPIED", "CLEANING", name="roomstatus")
    menu_category_enum = sa.Enum(
        "BREAKFAST", "LUNCH", "DINNER", "BEVERAGES", name="menucategory"
    )
    food_type_enum = sa.Enum("VEG", "NON_VEG", "GENERAL", name="foodtype")
    booking_status_enum = sa.Enum(
        "CONFIRMED", "CHECKED_IN", "CHECKED_OUT", "CANCELLED", name="bookingstatus"
    )
    order_status_enum = sa.Enum(
        "PENDING", "IN_PROGRESS", "DELIVERED", "CANCELLED", name="foodorderstatus"
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("phone_number", sa.String(length=32)),
        sa.Column("role", user_role_enum, nullable=False),
        sa.Column("status", user_status_enum, nullable=False, server_default="INVITED"),
        *_timestamps(),
    )
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "hotels",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False, unique=True),
        sa.Column("location", sa.String(length=100), nullable=False),
        sa.Column("address", sa.Text()),
        sa.Column("rating", sa.Numeric(2, 1), nullable=False, server_default="0.0"),
        sa.Column("base_price_per_night", sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("base_price_per_night >= 0", name="ck_hotel_rate_nonneg"),
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="ck_hotel_rating_range"),
    )

    op.create_table(
        "room_types",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=50), nullable=False, unique=True),
        sa.Column("max_capacity", sa.Integer(), nullable=False),
        sa.Column(
            "price_multiplier", sa.Numeric(4, 2), nullable=False, server_default="1.00"
        ),
        *_timestamps(),
        sa.CheckConstraint("max_capacity >= 1", name="ck_room_type_capacity"),
        sa.CheckConstraint("price_multiplier > 0", name="ck_room_type_multiplier"),
    )

    op.create_table(
        "rooms",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "hotel_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("hotels.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "room_type_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("room_types.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("room_number", sa.String(length=10), nullable=False),
        sa.Column("status", room_status_enum, nullable=False, server_default="VACANT"),
        *_timestamps(),
        sa.UniqueConstraint("hotel_id", "room_number", name="uq_room_hotel_number"),
    )

    op.create_table(
        "bookings",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "hotel_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("hotels.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "room_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("rooms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("check_in_date", sa.Date(), nullable=False),
        sa.Column("check_out_date", sa.Date(), nullable=False),
        sa.Column("total_nights", sa.Integer(), nullable=False),
        sa.Column("grand_total", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "status", booking_status_enum, nullable=False, server_default="CONFIRMED"
        ),
        sa.Column(
            "booked_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        *_timestamps(),
        sa.CheckConstraint("total_nights >= 1", name="ck_booking_nights"),
        sa.CheckConstraint("grand_total >= 0", name="ck_booking_total_nonneg"),
        sa.CheckConstraint(
            "check_out_date > check_in_date",
            name="ck_booking_checkout_after_checkin",
        ),
    )
    op.create_index("ix_bookings_hotel_id", "bookings", ["hotel_id"])

    op.create_table(
        "menu_items",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("category", menu_category_enum, nullable=False),
        sa.Column("food_type", food_type_enum, nullable=False),
        sa.Column(
            "is_available", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        *_timestamps(),
        sa.CheckConstraint("price >= 0", name="ck_menu_item_price_nonneg"),
    )

    op.create_table(
        "food_orders",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "booking_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("bookings.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("status", order_status_enum, nullable=False, server_default="PENDING"),
        sa.Column(
            "ordered_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        *_timestamps(),
    )

    op.create_table(
        "order_lines",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "order_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("food_orders.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "menu_item_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("menu_items.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("subtotal", sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("order_id", "menu_item_id", name="uq_order_line_item"),
        sa.CheckConstraint("quantity >= 1", name="ck_order_line_quantity"),
        sa.CheckConstraint("subtotal >= 0", name="ck_order_line_subtotal_nonneg"),
    )
    op.create_index("ix_order_lines_menu_item_id", "order_lines", ["menu_item_id"])

    op.create_table(
        "audit_events",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
        ),
        sa.Column("event_type", sa.String(length=120), nullable=False),
        sa.Column("description", sa.String(length=1024)),
        sa.Column("payload", sa.JSON()),
        sa.Column("ip_address", sa.String(length=64)),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_audit_events_event_type", "audit_events", ["event_type"])


def downgrade() -> None:
    op.drop_index("ix_audit_events_event_type", table_name="audit_events")
    op.drop_table("audit_events")

    op.drop_index("ix_order_lines_menu_item_id", table_name="order_lines")
    op.drop_table("order_lines")
    op.drop_table("food_orders")
    sa.Enum(name="foodorderstatus").drop(op.get_bind(), checkfirst=False)

    op.drop_table("menu_items")
    sa.Enum(name="foodtype").drop(op.get_bind(), checkfirst=False)
    sa.Enum(name="menucategory").drop(op.get_bind(), checkfirst=False)

    op.drop_index("ix_bookings_hotel_id", table_name="bookings")
    op.drop_table("bookings")
    sa.Enum(name="bookingstatus").drop(op.get_bind(), checkfirst=False)

    op.drop_table("rooms")
    sa.Enum(name="roomstatus").drop(op.get_bind(), checkfirst=False)
    op.drop_table("room_types")
    op.drop_table("hotels")

    op.drop_index("ix_users_role", table_name="users")
    op.drop_table("users")
    sa.Enum(name="userstatus").drop(op.get_bind(), checkfirst=False)
    sa.Enum(name="userrole").drop(op.get_bind(), checkfirst=False)
