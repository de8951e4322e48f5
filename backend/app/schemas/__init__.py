"""Schema exports."""

from app.schemas.auth import Token
from app.schemas.customer import (
    CustomerCreate,
    CustomerRead,
    CustomerUpdate,
)
from app.schemas.inventory import (
    AvailabilityRead,
    InventoryCategoryCreate,
    InventoryCategoryRead,
    InventoryCategoryUpdate,
    InventoryItemCreate,
    InventoryItemRead,
    InventoryItemUpdate,
)
from app.schemas.pricing import (
    PricingLineRead,
    PricingLineRequest,
    PricingQuoteRead,
    PricingQuoteRequest,
)
from app.schemas.reservation import (
    ReservationCounts,
    ReservationCreate,
    ReservationItemCreate,
    ReservationItemRead,
    ReservationRead,
    ReservationScheduleRead,
    ReservationStatusLabel,
    ReservationStatusLabelsUpdate,
    ReservationUpdate,
)
from app.schemas.user import UserCreate, UserRead

__all__ = [
    "AvailabilityRead",
    "CustomerCreate",
    "CustomerRead",
    "CustomerUpdate",
    "InventoryCategoryCreate",
    "InventoryCategoryRead",
    "InventoryCategoryUpdate",
    "InventoryItemCreate",
    "InventoryItemRead",
    "InventoryItemUpdate",
    "PricingLineRead",
    "PricingLineRequest",
    "PricingQuoteRead",
    "PricingQuoteRequest",
    "ReservationCounts",
    "ReservationCreate",
    "ReservationItemCreate",
    "ReservationItemRead",
    "ReservationRead",
    "ReservationScheduleRead",
    "ReservationStatusLabel",
    "ReservationStatusLabelsUpdate",
    "ReservationUpdate",
    "Token",
    "UserCreate",
    "UserRead",
]
