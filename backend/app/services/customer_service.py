"""Customer management services."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.customer import Customer
from app.schemas.customer import CustomerCreate, CustomerUpdate


async def list_customers(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    skip: int = 0,
    limit: int = 50,
) -> list[Customer]:
    """Return customers ordered by name."""
    result = await session.execute(
        select(Customer)
        .where(Customer.business_id == business_id)
        .order_by(Customer.name)
        .offset(skip)
        .limit(min(limit, 100))
    )
    return list(result.scalars().all())


async def get_customer(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    customer_id: uuid.UUID,
) -> Customer | None:
    customer = await session.get(Customer, customer_id)
    if customer is None or customer.business_id != business_id:
        return None
    return customer


def build_customer(business_id: uuid.UUID, payload: CustomerCreate) -> Customer:
    """Return an unsaved customer for the business."""
    return Customer(
        business_id=business_id,
        name=payload.name,
        email=payload.email or None,
        phone=payload.phone or None,
    )


async def create_customer(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    payload: CustomerCreate,
) -> Customer:
    customer = build_customer(business_id, payload)
    session.add(customer)
    await session.commit()
    await session.refresh(customer)
    return customer


async def update_customer(
    session: AsyncSession,
    customer: Customer,
    payload: CustomerUpdate,
) -> Customer:
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(customer, field, value)
    await session.commit()
    await session.refresh(customer)
    return customer


async def delete_customer(session: AsyncSession, customer: Customer) -> None:
    """Delete a customer; reservations keep their name snapshot."""
    await session.delete(customer)
    await session.commit()
