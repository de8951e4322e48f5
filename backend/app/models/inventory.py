"""Inventory category and item models."""

from __future__ import annotations

import enum
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from app.models.business import Business


class RateType(str, enum.Enum):
    """Billing granularity for a rented item."""

    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class InventoryCategory(TimestampMixin, Base):
    """Grouping for inventory items within a business."""

    __tablename__ = "inventory_categories"
    __table_args__ = (
        UniqueConstraint("business_id", "name", name="uq_inventory_category_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    business_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    business: Mapped["Business"] = relationship(
        "Business", back_populates="categories"
    )
    items: Mapped[list["InventoryItem"]] = relationship(
        "InventoryItem", back_populates="category"
    )


class InventoryItem(TimestampMixin, Base):
    """A rentable asset with on-hand quantity and optional unit rates."""

    __tablename__ = "inventory_items"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="quantity_non_negative"),
        CheckConstraint(
            "hourly_rate IS NULL OR hourly_rate >= 0", name="hourly_rate_non_negative"
        ),
        CheckConstraint(
            "daily_rate IS NULL OR daily_rate >= 0", name="daily_rate_non_negative"
        ),
        CheckConstraint(
            "weekly_rate IS NULL OR weekly_rate >= 0", name="weekly_rate_non_negative"
        ),
        CheckConstraint(
            "monthly_rate IS NULL OR monthly_rate >= 0",
            name="monthly_rate_non_negative",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    business_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("inventory_categories.id", ondelete="SET NULL"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    hourly_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    daily_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    weekly_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    monthly_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))

    business: Mapped["Business"] = relationship(
        "Business", back_populates="inventory_items"
    )
    category: Mapped["InventoryCategory | None"] = relationship(
        "InventoryCategory", back_populates="items"
    )
