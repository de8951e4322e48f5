"""Pydantic schemas for reservations."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.models.inventory import RateType
from app.models.reservation import DiscountType, ReservationStatus
from app.schemas.customer import CustomerCreate


class ReservationItemCreate(BaseModel):
    """Requested line item.

    ``rate_amount`` is optional; when omitted the current rate of the
    inventory item is snapshotted.
    """

    inventory_item_id: uuid.UUID
    quantity: int = Field(ge=1)
    rate_type: RateType
    rate_amount: Decimal | None = Field(default=None, ge=Decimal("0"))


class ReservationItemRead(BaseModel):
    """Serialized reservation line item."""

    id: uuid.UUID
    inventory_item_id: uuid.UUID
    quantity: int
    rate_type: RateType
    rate_amount: Decimal
    subtotal: Decimal

    model_config = ConfigDict(from_attributes=True)


class ReservationBase(BaseModel):
    """Shared reservation fields."""

    start_date: date
    end_date: date
    discount_type: DiscountType | None = None
    discount_amount: Decimal | None = Field(default=None, ge=Decimal("0"))
    notes: str | None = None


class ReservationCreate(ReservationBase):
    """Payload for creating reservations.

    Either ``customer_id`` or an inline ``customer`` must be supplied.
    """

    customer_id: uuid.UUID | None = None
    customer: CustomerCreate | None = None
    status: ReservationStatus = ReservationStatus.DRAFT
    items: list[ReservationItemCreate] = Field(min_length=1)


class ReservationUpdate(BaseModel):
    """Mutable reservation fields; ``items`` replaces the whole line set."""

    customer_id: uuid.UUID | None = None
    customer: CustomerCreate | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: ReservationStatus | None = None
    discount_type: DiscountType | None = None
    discount_amount: Decimal | None = Field(default=None, ge=Decimal("0"))
    notes: str | None = None
    items: list[ReservationItemCreate] | None = Field(default=None, min_length=1)


class ReservationRead(ReservationBase):
    """Serialized reservation representation."""

    id: uuid.UUID
    business_id: uuid.UUID
    customer_id: uuid.UUID | None = None
    customer_name: str
    customer_email: str | None = None
    customer_phone: str | None = None
    status: ReservationStatus
    total_price: Decimal
    items: list[ReservationItemRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReservationStatusLabel(BaseModel):
    """Display label for a status key."""

    status_key: ReservationStatus
    label: str = Field(min_length=1, max_length=120)

    model_config = ConfigDict(from_attributes=True)


class ReservationStatusLabelsUpdate(BaseModel):
    """Payload replacing a business's status labels."""

    labels: list[ReservationStatusLabel] = Field(min_length=1)


class ReservationCounts(BaseModel):
    """Reservation totals per status."""

    draft: int = 0
    reserved: int = 0
    in_use: int = 0
    closed: int = 0


class ReservationScheduleRead(BaseModel):
    """Reservations leaving and coming back within the selected windows."""

    departing: list[ReservationRead]
    returning: list[ReservationRead]
