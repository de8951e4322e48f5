"""Inventory schemas for CRUD and availability operations."""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _require_value(value: Any) -> Any:
    if value is None:
        raise ValueError("Field may be omitted but not set to null")
    return value


class InventoryCategoryBase(BaseModel):
    """Shared category fields."""

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class InventoryCategoryCreate(InventoryCategoryBase):
    """Payload for creating a category."""


class InventoryCategoryUpdate(BaseModel):
    """Mutable category fields."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def _reject_null(cls, value: str | None) -> str | None:
        return _require_value(value)


class InventoryCategoryRead(InventoryCategoryBase):
    """Serialized category."""

    id: uuid.UUID
    business_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InventoryItemBase(BaseModel):
    """Shared inventory item fields."""

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category_id: uuid.UUID | None = None
    quantity: int = Field(default=0, ge=0)
    hourly_rate: Decimal | None = Field(default=None, ge=Decimal("0"))
    daily_rate: Decimal | None = Field(default=None, ge=Decimal("0"))
    weekly_rate: Decimal | None = Field(default=None, ge=Decimal("0"))
    monthly_rate: Decimal | None = Field(default=None, ge=Decimal("0"))


class InventoryItemCreate(InventoryItemBase):
    """Payload for creating an inventory item."""


class InventoryItemUpdate(BaseModel):
    """Mutable inventory item fields."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category_id: uuid.UUID | None = None
    quantity: int | None = Field(default=None, ge=0)
    hourly_rate: Decimal | None = Field(default=None, ge=Decimal("0"))
    daily_rate: Decimal | None = Field(default=None, ge=Decimal("0"))
    weekly_rate: Decimal | None = Field(default=None, ge=Decimal("0"))
    monthly_rate: Decimal | None = Field(default=None, ge=Decimal("0"))

    @field_validator("name", "quantity")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        return _require_value(value)


class InventoryItemRead(InventoryItemBase):
    """Serialized inventory item."""

    id: uuid.UUID
    business_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AvailabilityRead(BaseModel):
    """Availability check response."""

    inventory_item_id: uuid.UUID
    available: bool
    available_quantity: int
    total_quantity: int
    reserved_quantity: int
    error: str | None = None
