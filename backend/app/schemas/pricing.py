"""Pricing schema definitions."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.models.inventory import RateType
from app.models.reservation import DiscountType


class PricingLineRequest(BaseModel):
    """Line item to be priced.

    ``rate_amount`` is optional when ``inventory_item_id`` is given; the
    item's current rate is used instead.
    """

    inventory_item_id: uuid.UUID | None = None
    quantity: int
    rate_type: RateType
    rate_amount: Decimal | None = None


class PricingQuoteRequest(BaseModel):
    """Input payload for generating an order quote."""

    start_date: date
    end_date: date
    items: list[PricingLineRequest] = Field(default_factory=list)
    discount_type: DiscountType | None = None
    discount_amount: Decimal | None = None


class PricingLineRead(BaseModel):
    """Individual line item within a pricing quote."""

    inventory_item_id: uuid.UUID | None = None
    description: str
    quantity: int
    rate_type: RateType
    rate_amount: Decimal
    duration: int
    subtotal: Decimal

    model_config = ConfigDict(from_attributes=True)


class PricingQuoteRead(BaseModel):
    """Aggregated pricing response."""

    lines: list[PricingLineRead]
    subtotal: Decimal
    discount_total: Decimal
    total: Decimal

    model_config = ConfigDict(from_attributes=True)
