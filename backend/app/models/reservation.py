"""Reservation models."""
from __future__ import annotations

import enum
import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    Date,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.inventory import RateType
from app.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from app.models.customer import Customer
    from app.models.inventory import InventoryItem


class ReservationStatus(str, enum.Enum):
    """Lifecycle states for reservations."""

    DRAFT = "draft"
    RESERVED = "reserved"
    IN_USE = "in_use"
    CLOSED = "closed"


class DiscountType(str, enum.Enum):
    """How a reservation discount is applied to the subtotal."""

    FIXED = "fixed"
    PERCENTAGE = "percentage"


class Reservation(TimestampMixin, Base):
    """An order for a customer over a date range."""

    __tablename__ = "reservations"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    business_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    customer_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("customers.id", ondelete="SET NULL"), nullable=True
    )
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_email: Mapped[str | None] = mapped_column(String(320))
    customer_phone: Mapped[str | None] = mapped_column(String(32))
    status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus), default=ReservationStatus.DRAFT, nullable=False
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    discount_type: Mapped[DiscountType | None] = mapped_column(Enum(DiscountType))
    discount_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    total_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0.00"), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text)

    customer: Mapped["Customer | None"] = relationship(
        "Customer", back_populates="reservations"
    )
    items: Mapped[list["ReservationItem"]] = relationship(
        "ReservationItem",
        back_populates="reservation",
        cascade="all, delete-orphan",
        order_by="ReservationItem.created_at",
    )


class ReservationItem(TimestampMixin, Base):
    """One rented inventory item, with quantity and rate snapshot."""

    __tablename__ = "reservation_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="quantity_positive"),
        CheckConstraint("rate_amount >= 0", name="rate_amount_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    reservation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    inventory_item_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("inventory_items.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    rate_type: Mapped[RateType] = mapped_column(Enum(RateType), nullable=False)
    rate_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    reservation: Mapped["Reservation"] = relationship(
        "Reservation", back_populates="items"
    )
    inventory_item: Mapped["InventoryItem"] = relationship("InventoryItem")


class ReservationStatusSetting(TimestampMixin, Base):
    """Business-specific display label for a reservation status."""

    __tablename__ = "reservation_status_settings"
    __table_args__ = (
        UniqueConstraint(
            "business_id", "status_key", name="uq_status_setting_business_key"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    business_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False
    )
    status_key: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus), nullable=False
    )
    label: Mapped[str] = mapped_column(String(120), nullable=False)
