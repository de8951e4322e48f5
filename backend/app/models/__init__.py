"""ORM models package export."""

from app.models.business import Business
from app.models.customer import Customer
from app.models.inventory import InventoryCategory, InventoryItem, RateType
from app.models.reservation import (
    DiscountType,
    Reservation,
    ReservationItem,
    ReservationStatus,
    ReservationStatusSetting,
)
from app.models.user import User, UserRole, UserStatus

__all__ = [
    "Business",
    "Customer",
    "DiscountType",
    "InventoryCategory",
    "InventoryItem",
    "RateType",
    "Reservation",
    "ReservationItem",
    "ReservationStatus",
    "ReservationStatusSetting",
    "User",
    "UserRole",
    "UserStatus",
]
