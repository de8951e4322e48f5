"""Inventory management API."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.inventory import InventoryCategory, InventoryItem
from app.models.user import User
from app.schemas.inventory import (
    AvailabilityRead,
    InventoryCategoryCreate,
    InventoryCategoryRead,
    InventoryCategoryUpdate,
    InventoryItemCreate,
    InventoryItemRead,
    InventoryItemUpdate,
)
from app.services import availability_service, inventory_service

router = APIRouter()


async def _get_category_or_404(
    session: AsyncSession, *, business_id: uuid.UUID, category_id: uuid.UUID
) -> InventoryCategory:
    category = await inventory_service.get_category(
        session, business_id=business_id, category_id=category_id
    )
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Category not found"
        )
    return category


async def _get_item_or_404(
    session: AsyncSession, *, business_id: uuid.UUID, item_id: uuid.UUID
) -> InventoryItem:
    item = await inventory_service.get_item(
        session, business_id=business_id, item_id=item_id
    )
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found"
        )
    return item


@router.get(
    "/categories",
    response_model=list[InventoryCategoryRead],
    summary="List inventory categories",
)
async def list_categories(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> list[InventoryCategoryRead]:
    categories = await inventory_service.list_categories(
        session, business_id=current_user.business_id
    )
    return [InventoryCategoryRead.model_validate(obj) for obj in categories]


@router.post(
    "/categories",
    response_model=InventoryCategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create inventory category",
)
async def create_category(
    payload: InventoryCategoryCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> InventoryCategoryRead:
    try:
        category = await inventory_service.create_category(
            session, business_id=current_user.business_id, payload=payload
        )
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Category name already exists",
        ) from exc
    return InventoryCategoryRead.model_validate(category)


@router.patch(
    "/categories/{category_id}",
    response_model=InventoryCategoryRead,
    summary="Update inventory category",
)
async def update_category(
    category_id: uuid.UUID,
    payload: InventoryCategoryUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> InventoryCategoryRead:
    category = await _get_category_or_404(
        session, business_id=current_user.business_id, category_id=category_id
    )
    try:
        updated = await inventory_service.update_category(session, category, payload)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Category name already exists",
        ) from exc
    return InventoryCategoryRead.model_validate(updated)


@router.delete(
    "/categories/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete inventory category",
)
async def delete_category(
    category_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> None:
    category = await _get_category_or_404(
        session, business_id=current_user.business_id, category_id=category_id
    )
    await inventory_service.delete_category(session, category)


@router.get("", response_model=list[InventoryItemRead], summary="List inventory")
async def list_items(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
    category_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[InventoryItemRead]:
    items = await inventory_service.list_items(
        session,
        business_id=current_user.business_id,
        category_id=category_id,
        skip=skip,
        limit=limit,
    )
    return [InventoryItemRead.model_validate(obj) for obj in items]


@router.post(
    "",
    response_model=InventoryItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create inventory item",
)
async def create_item(
    payload: InventoryItemCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> InventoryItemRead:
    try:
        item = await inventory_service.create_item(
            session, business_id=current_user.business_id, payload=payload
        )
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to create inventory item",
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return InventoryItemRead.model_validate(item)


@router.get(
    "/{item_id}", response_model=InventoryItemRead, summary="Get inventory item"
)
async def get_item(
    item_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> InventoryItemRead:
    item = await _get_item_or_404(
        session, business_id=current_user.business_id, item_id=item_id
    )
    return InventoryItemRead.model_validate(item)


@router.patch(
    "/{item_id}", response_model=InventoryItemRead, summary="Update inventory item"
)
async def update_item(
    item_id: uuid.UUID,
    payload: InventoryItemUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> InventoryItemRead:
    item = await _get_item_or_404(
        session, business_id=current_user.business_id, item_id=item_id
    )
    try:
        updated = await inventory_service.update_item(session, item, payload)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to update inventory item",
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return InventoryItemRead.model_validate(updated)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete inventory item",
)
async def delete_item(
    item_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> None:
    item = await _get_item_or_404(
        session, business_id=current_user.business_id, item_id=item_id
    )
    try:
        await inventory_service.delete_item(session, item)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


@router.get(
    "/{item_id}/availability",
    response_model=AvailabilityRead,
    summary="Check inventory availability",
)
async def check_item_availability(
    item_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
    start_date: date,
    end_date: date,
    quantity: Annotated[int, Query(ge=1)] = 1,
    exclude_reservation_id: uuid.UUID | None = None,
) -> AvailabilityRead:
    """Report how many units are free over the range.

    The answer is advisory; reservations re-check when they are committed.
    """
    await _get_item_or_404(
        session, business_id=current_user.business_id, item_id=item_id
    )
    result = await availability_service.check_availability(
        session,
        business_id=current_user.business_id,
        inventory_item_id=item_id,
        requested_quantity=quantity,
        start_date=start_date,
        end_date=end_date,
        exclude_reservation_id=exclude_reservation_id,
    )
    return AvailabilityRead(inventory_item_id=item_id, **result.to_dict())
