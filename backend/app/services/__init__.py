"""Service layer exports."""
from app.services import (
    auth_service,
    availability_service,
    customer_service,
    dashboard_service,
    inventory_service,
    pricing_service,
    reservation_service,
    status_settings_service,
    user_service,
)

__all__ = [
    "auth_service",
    "availability_service",
    "customer_service",
    "dashboard_service",
    "inventory_service",
    "pricing_service",
    "reservation_service",
    "status_settings_service",
    "user_service",
]
