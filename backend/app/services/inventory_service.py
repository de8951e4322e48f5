"""Inventory category and item management services."""

from __future__ import annotations

import uuid

from sqlalchemy import Select, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.inventory import InventoryCategory, InventoryItem
from app.models.reservation import ReservationItem
from app.schemas.inventory import (
    InventoryCategoryCreate,
    InventoryCategoryUpdate,
    InventoryItemCreate,
    InventoryItemUpdate,
)


async def list_categories(
    session: AsyncSession, *, business_id: uuid.UUID
) -> list[InventoryCategory]:
    """Return the business's categories ordered by name."""
    result = await session.execute(
        select(InventoryCategory)
        .where(InventoryCategory.business_id == business_id)
        .order_by(InventoryCategory.name)
    )
    return list(result.scalars().all())


async def get_category(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    category_id: uuid.UUID,
) -> InventoryCategory | None:
    category = await session.get(InventoryCategory, category_id)
    if category is None or category.business_id != business_id:
        return None
    return category


async def create_category(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    payload: InventoryCategoryCreate,
) -> InventoryCategory:
    """Create a category; names are unique per business."""
    category = InventoryCategory(business_id=business_id, **payload.model_dump())
    session.add(category)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(category)
    return category


async def update_category(
    session: AsyncSession,
    category: InventoryCategory,
    payload: InventoryCategoryUpdate,
) -> InventoryCategory:
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(category, field, value)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(category)
    return category


async def delete_category(session: AsyncSession, category: InventoryCategory) -> None:
    """Delete a category; its items keep existing without a category."""
    await session.delete(category)
    await session.commit()


async def list_items(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    category_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[InventoryItem]:
    """Return inventory items, newest first."""
    stmt: Select[tuple[InventoryItem]] = select(InventoryItem).where(
        InventoryItem.business_id == business_id
    )
    if category_id is not None:
        stmt = stmt.where(InventoryItem.category_id == category_id)
    stmt = (
        stmt.order_by(InventoryItem.created_at.desc())
        .offset(skip)
        .limit(min(limit, 100))
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_item(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    item_id: uuid.UUID,
) -> InventoryItem | None:
    """Fetch an inventory item scoped to the business."""
    item = await session.get(InventoryItem, item_id)
    if item is None or item.business_id != business_id:
        return None
    return item


async def _validate_category(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    category_id: uuid.UUID | None,
) -> None:
    if category_id is None:
        return
    if await get_category(session, business_id=business_id, category_id=category_id) is None:
        raise ValueError("Category does not belong to the provided business")


async def create_item(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    payload: InventoryItemCreate,
) -> InventoryItem:
    await _validate_category(
        session, business_id=business_id, category_id=payload.category_id
    )
    item = InventoryItem(business_id=business_id, **payload.model_dump())
    session.add(item)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(item)
    return item


async def update_item(
    session: AsyncSession,
    item: InventoryItem,
    payload: InventoryItemUpdate,
) -> InventoryItem:
    changes = payload.model_dump(exclude_unset=True)
    if "category_id" in changes:
        await _validate_category(
            session, business_id=item.business_id, category_id=changes["category_id"]
        )
    for field, value in changes.items():
        setattr(item, field, value)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(item)
    return item


async def delete_item(session: AsyncSession, item: InventoryItem) -> None:
    """Delete an inventory item that no reservation line references."""
    referenced = await session.scalar(
        select(exists().where(ReservationItem.inventory_item_id == item.id))
    )
    if referenced:
        raise ValueError("Inventory item is referenced by existing reservations")
    await session.delete(item)
    await session.commit()
