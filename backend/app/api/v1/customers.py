"""Customer management API."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.user import User
from app.schemas.customer import CustomerCreate, CustomerRead, CustomerUpdate
from app.services import customer_service

router = APIRouter()


async def _get_customer_or_404(
    session: AsyncSession, *, business_id: uuid.UUID, customer_id: uuid.UUID
):
    customer = await customer_service.get_customer(
        session, business_id=business_id, customer_id=customer_id
    )
    if customer is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found"
        )
    return customer


@router.get("", response_model=list[CustomerRead], summary="List customers")
async def list_customers(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
    skip: int = 0,
    limit: int = 50,
) -> list[CustomerRead]:
    customers = await customer_service.list_customers(
        session, business_id=current_user.business_id, skip=skip, limit=limit
    )
    return [CustomerRead.model_validate(obj) for obj in customers]


@router.post(
    "",
    response_model=CustomerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create customer",
)
async def create_customer(
    payload: CustomerCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> CustomerRead:
    customer = await customer_service.create_customer(
        session, business_id=current_user.business_id, payload=payload
    )
    return CustomerRead.model_validate(customer)


@router.get("/{customer_id}", response_model=CustomerRead, summary="Get customer")
async def get_customer(
    customer_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> CustomerRead:
    customer = await _get_customer_or_404(
        session, business_id=current_user.business_id, customer_id=customer_id
    )
    return CustomerRead.model_validate(customer)


@router.patch("/{customer_id}", response_model=CustomerRead, summary="Update customer")
async def update_customer(
    customer_id: uuid.UUID,
    payload: CustomerUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> CustomerRead:
    customer = await _get_customer_or_404(
        session, business_id=current_user.business_id, customer_id=customer_id
    )
    updated = await customer_service.update_customer(session, customer, payload)
    return CustomerRead.model_validate(updated)


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete customer",
)
async def delete_customer(
    customer_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> None:
    customer = await _get_customer_or_404(
        session, business_id=current_user.business_id, customer_id=customer_id
    )
    await customer_service.delete_customer(session, customer)
