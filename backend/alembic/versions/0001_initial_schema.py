"""Initial rental desk schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

RESERVATION_STATUS = sa.Enum(
    "DRAFT", "RESERVED", "IN_USE", "CLOSED", name="reservationstatus"
)
RATE_TYPE = sa.Enum("HOURLY", "DAILY", "WEEKLY", "MONTHLY", name="ratetype")
# Shared with reservation_status_settings; the type is created once.
RESERVATION_STATUS_REF = postgresql.ENUM(
    "DRAFT",
    "RESERVED",
    "IN_USE",
    "CLOSED",
    name="reservationstatus",
    create_type=False,
)
DISCOUNT_TYPE = sa.Enum("FIXED", "PERCENTAGE", name="discounttype")
USER_ROLE = sa.Enum("OWNER", "ADMIN", "STAFF", name="userrole")
USER_STATUS = sa.Enum("INVITED", "ACTIVE", "SUSPENDED", name="userstatus")


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
    op.create_table(
        "businesses",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "business_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("businesses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("role", USER_ROLE, nullable=False),
        sa.Column("status", USER_STATUS, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "business_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("businesses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320)),
        sa.Column("phone", sa.String(length=32)),
        *_timestamps(),
    )
    op.create_index("ix_customers_business_id", "customers", ["business_id"])

    op.create_table(
        "inventory_categories",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "business_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("businesses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text()),
        *_timestamps(),
        sa.UniqueConstraint("business_id", "name", name="uq_inventory_category_name"),
    )

    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "business_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("businesses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "category_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("inventory_categories.id", ondelete="SET NULL"),
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("hourly_rate", sa.Numeric(10, 2)),
        sa.Column("daily_rate", sa.Numeric(10, 2)),
        sa.Column("weekly_rate", sa.Numeric(10, 2)),
        sa.Column("monthly_rate", sa.Numeric(10, 2)),
        *_timestamps(),
        sa.CheckConstraint("quantity >= 0", name="quantity_non_negative"),
        sa.CheckConstraint(
            "hourly_rate IS NULL OR hourly_rate >= 0", name="hourly_rate_non_negative"
        ),
        sa.CheckConstraint(
            "daily_rate IS NULL OR daily_rate >= 0", name="daily_rate_non_negative"
        ),
        sa.CheckConstraint(
            "weekly_rate IS NULL OR weekly_rate >= 0", name="weekly_rate_non_negative"
        ),
        sa.CheckConstraint(
            "monthly_rate IS NULL OR monthly_rate >= 0",
            name="monthly_rate_non_negative",
        ),
    )
    op.create_index("ix_inventory_items_business_id", "inventory_items", ["business_id"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "business_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("businesses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "customer_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("customers.id", ondelete="SET NULL"),
        ),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_email", sa.String(length=320)),
        sa.Column("customer_phone", sa.String(length=32)),
        sa.Column("status", RESERVATION_STATUS, nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("discount_type", DISCOUNT_TYPE),
        sa.Column("discount_amount", sa.Numeric(12, 2)),
        sa.Column("total_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("notes", sa.Text()),
        *_timestamps(),
    )
    op.create_index("ix_reservations_business_id", "reservations", ["business_id"])

    op.create_table(
        "reservation_items",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "reservation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("reservations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "inventory_item_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("inventory_items.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("rate_type", RATE_TYPE, nullable=False),
        sa.Column("rate_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("subtotal", sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("quantity > 0", name="quantity_positive"),
        sa.CheckConstraint("rate_amount >= 0", name="rate_amount_non_negative"),
    )
    op.create_index(
        "ix_reservation_items_reservation_id", "reservation_items", ["reservation_id"]
    )
    op.create_index(
        "ix_reservation_items_inventory_item_id",
        "reservation_items",
        ["inventory_item_id"],
    )

    op.create_table(
        "reservation_status_settings",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "business_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("businesses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status_key", RESERVATION_STATUS_REF, nullable=False),
        sa.Column("label", sa.String(length=120), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            "business_id", "status_key", name="uq_status_setting_business_key"
        ),
    )


def downgrade() -> None:
    op.drop_table("reservation_status_settings")
    op.drop_index("ix_reservation_items_inventory_item_id", table_name="reservation_items")
    op.drop_index("ix_reservation_items_reservation_id", table_name="reservation_items")
    op.drop_table("reservation_items")
    op.drop_index("ix_reservations_business_id", table_name="reservations")
    op.drop_table("reservations")
    op.drop_index("ix_inventory_items_business_id", table_name="inventory_items")
    op.drop_table("inventory_items")
    op.drop_table("inventory_categories")
    op.drop_index("ix_customers_business_id", table_name="customers")
    op.drop_table("customers")
    op.drop_table("users")
    op.drop_table("businesses")
    bind = op.get_bind()
    for enum_type in (
        RESERVATION_STATUS,
        RATE_TYPE,
        DISCOUNT_TYPE,
        USER_ROLE,
        USER_STATUS,
    ):
        enum_type.drop(bind, checkfirst=True)
