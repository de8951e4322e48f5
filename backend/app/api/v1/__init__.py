"""Versioned API router."""

from fastapi import APIRouter

from . import auth, customers, health, inventory, pricing, reservations

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
router.include_router(customers.router, prefix="/customers", tags=["customers"])
router.include_router(
    reservations.router, prefix="/reservations", tags=["reservations"]
)
router.include_router(pricing.router, prefix="/pricing", tags=["pricing"])

__all__ = ["router"]
