"""Reservation management service helpers."""
from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.customer import Customer
from app.models.inventory import InventoryItem
from app.models.reservation import (
    DiscountType,
    Reservation,
    ReservationItem,
    ReservationStatus,
)
from app.schemas.customer import CustomerCreate
from app.schemas.reservation import ReservationItemCreate
from app.services import availability_service, customer_service, pricing_service
from app.services.availability_service import AvailabilityConflictError

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[ReservationStatus, set[ReservationStatus]] = {
    ReservationStatus.DRAFT: {ReservationStatus.RESERVED},
    ReservationStatus.RESERVED: {ReservationStatus.DRAFT, ReservationStatus.IN_USE},
    ReservationStatus.IN_USE: {ReservationStatus.CLOSED},
    ReservationStatus.CLOSED: set(),
}


def _base_reservation_query(business_id: uuid.UUID):
    return (
        select(Reservation)
        .options(selectinload(Reservation.items))
        .where(Reservation.business_id == business_id)
    )


async def list_reservations(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    status: ReservationStatus | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Reservation]:
    stmt = _base_reservation_query(business_id).order_by(Reservation.created_at.desc())
    if status is not None:
        stmt = stmt.where(Reservation.status == status)
    result = await session.execute(stmt.offset(skip).limit(limit))
    return result.scalars().unique().all()


async def get_reservation(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    reservation_id: uuid.UUID,
) -> Reservation | None:
    stmt = (
        _base_reservation_query(business_id)
        .where(Reservation.id == reservation_id)
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return result.scalars().unique().one_or_none()


def _validate_dates(start_date: date, end_date: date) -> None:
    if start_date >= end_date:
        raise ValueError("Reservation end date must be after start date")


def _validate_status_transition(
    current: ReservationStatus, target: ReservationStatus
) -> None:
    if target == current:
        return
    allowed = _ALLOWED_STATUS_TRANSITIONS.get(current, set())
    if target not in allowed:
        raise ValueError(
            f"Invalid status transition from {current.value} to {target.value}"
        )


async def _resolve_customer(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    customer_id: uuid.UUID | None,
    customer: CustomerCreate | None,
) -> Customer:
    if customer_id is not None:
        existing = await customer_service.get_customer(
            session, business_id=business_id, customer_id=customer_id
        )
        if existing is None:
            raise ValueError("Customer does not belong to the provided business")
        return existing
    if customer is not None:
        return customer_service.build_customer(business_id, customer)
    raise ValueError("A customer or new customer details are required")


def _apply_customer(reservation: Reservation, customer: Customer) -> None:
    reservation.customer = customer
    reservation.customer_name = customer.name
    reservation.customer_email = customer.email
    reservation.customer_phone = customer.phone


async def _build_items(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    items: Sequence[ReservationItemCreate],
) -> list[ReservationItem]:
    """Create line items, snapshotting rates from inventory when not given."""
    built: list[ReservationItem] = []
    for requested in items:
        inventory_item = await session.get(InventoryItem, requested.inventory_item_id)
        if inventory_item is None or inventory_item.business_id != business_id:
            raise ValueError("Inventory item does not belong to the provided business")
        rate_amount = requested.rate_amount
        if rate_amount is None:
            rate_amount = pricing_service.rate_for(inventory_item, requested.rate_type)
        built.append(
            ReservationItem(
                inventory_item_id=inventory_item.id,
                quantity=requested.quantity,
                rate_type=requested.rate_type,
                rate_amount=pricing_service.to_money(rate_amount or Decimal("0")),
                subtotal=Decimal("0.00"),
            )
        )
    return built


def _reprice(
    reservation: Reservation,
    items: Sequence[ReservationItem],
) -> None:
    """Recompute every line subtotal and the reservation total in place."""
    for item in items:
        item.subtotal = pricing_service.to_money(
            pricing_service.compute_line_subtotal(
                item.quantity,
                item.rate_amount,
                item.rate_type,
                reservation.start_date,
                reservation.end_date,
            )
        )
    discount = pricing_service.build_discount(
        reservation.discount_type, reservation.discount_amount
    )
    reservation.total_price = pricing_service.compute_order_total(items, discount)


async def _ensure_inventory_available(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    status: ReservationStatus,
    start_date: date,
    end_date: date,
    items: Sequence[ReservationItem],
    exclude_reservation_id: uuid.UUID | None = None,
) -> None:
    """Re-verify availability inside the writing transaction.

    Inventory rows are locked first so concurrent commits for the same item
    serialize; the overlap sum is then read under that lock.
    """
    if status not in availability_service.COMMITTED_STATUSES:
        return

    requested: dict[uuid.UUID, int] = defaultdict(int)
    for item in items:
        requested[item.inventory_item_id] += item.quantity

    await session.execute(
        select(InventoryItem.id)
        .where(
            InventoryItem.id.in_(sorted(requested, key=str)),
            InventoryItem.business_id == business_id,
        )
        .with_for_update()
    )

    for inventory_item_id, quantity in requested.items():
        result = await availability_service.check_availability(
            session,
            business_id=business_id,
            inventory_item_id=inventory_item_id,
            requested_quantity=quantity,
            start_date=start_date,
            end_date=end_date,
            exclude_reservation_id=exclude_reservation_id,
        )
        if result.error is not None:
            raise ValueError(result.error)
        if not result.available:
            logger.info(
                "Rejected booking of %s x %s: %s available",
                quantity,
                inventory_item_id,
                result.available_quantity,
            )
            raise AvailabilityConflictError(
                inventory_item_id,
                requested=quantity,
                available=result.available_quantity,
            )


async def create_reservation(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    start_date: date,
    end_date: date,
    items: Sequence[ReservationItemCreate],
    customer_id: uuid.UUID | None = None,
    customer: CustomerCreate | None = None,
    status: ReservationStatus = ReservationStatus.DRAFT,
    discount_type: DiscountType | None = None,
    discount_amount: Decimal | None = None,
    notes: str | None = None,
) -> Reservation:
    _validate_dates(start_date, end_date)
    if not items:
        raise ValueError("Reservation requires at least one item")
    pricing_service.build_discount(discount_type, discount_amount)
    if discount_amount is not None:
        discount_amount = pricing_service.to_money(discount_amount)

    line_items = await _build_items(session, business_id=business_id, items=items)
    resolved_customer = await _resolve_customer(
        session, business_id=business_id, customer_id=customer_id, customer=customer
    )
    reservation = Reservation(
        business_id=business_id,
        status=status,
        start_date=start_date,
        end_date=end_date,
        discount_type=discount_type,
        discount_amount=discount_amount,
        notes=notes,
    )
    _reprice(reservation, line_items)

    try:
        await _ensure_inventory_available(
            session,
            business_id=business_id,
            status=status,
            start_date=start_date,
            end_date=end_date,
            items=line_items,
        )
        _apply_customer(reservation, resolved_customer)
        reservation.items = line_items
        session.add(reservation)
        await session.commit()
    except (IntegrityError, ValueError):
        await session.rollback()
        raise

    created = await get_reservation(
        session, business_id=business_id, reservation_id=reservation.id
    )
    assert created is not None
    return created


async def update_reservation(
    session: AsyncSession,
    *,
    reservation: Reservation,
    business_id: uuid.UUID,
    customer_id: uuid.UUID | None = None,
    customer: CustomerCreate | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    status: ReservationStatus | None = None,
    discount_type: DiscountType | None = None,
    discount_amount: Decimal | None = None,
    notes: str | None = None,
    items: Sequence[ReservationItemCreate] | None = None,
) -> Reservation:
    if reservation.business_id != business_id:
        raise ValueError("Reservation does not belong to the provided business")

    new_start = start_date if start_date is not None else reservation.start_date
    new_end = end_date if end_date is not None else reservation.end_date
    _validate_dates(new_start, new_end)
    new_status = status if status is not None else reservation.status
    _validate_status_transition(reservation.status, new_status)
    new_discount_type = (
        discount_type if discount_type is not None else reservation.discount_type
    )
    new_discount_amount = (
        discount_amount if discount_amount is not None else reservation.discount_amount
    )
    pricing_service.build_discount(new_discount_type, new_discount_amount)
    if new_discount_amount is not None:
        new_discount_amount = pricing_service.to_money(new_discount_amount)

    resolved_customer: Customer | None = None
    if customer_id is not None or customer is not None:
        resolved_customer = await _resolve_customer(
            session, business_id=business_id, customer_id=customer_id, customer=customer
        )

    if items is not None:
        line_items = await _build_items(session, business_id=business_id, items=items)
    else:
        line_items = list(reservation.items)

    try:
        await _ensure_inventory_available(
            session,
            business_id=business_id,
            status=new_status,
            start_date=new_start,
            end_date=new_end,
            items=line_items,
            exclude_reservation_id=reservation.id,
        )
        reservation.start_date = new_start
        reservation.end_date = new_end
        reservation.status = new_status
        reservation.discount_type = new_discount_type
        reservation.discount_amount = new_discount_amount
        if notes is not None:
            reservation.notes = notes
        if resolved_customer is not None:
            _apply_customer(reservation, resolved_customer)
        if items is not None:
            reservation.items = line_items
        _reprice(reservation, line_items)
        await session.commit()
    except (IntegrityError, ValueError):
        await session.rollback()
        raise

    updated = await get_reservation(
        session, business_id=business_id, reservation_id=reservation.id
    )
    assert updated is not None
    return updated


async def delete_reservation(
    session: AsyncSession,
    *,
    reservation: Reservation,
    business_id: uuid.UUID,
) -> None:
    if reservation.business_id != business_id:
        raise ValueError("Reservation does not belong to the provided business")
    await session.delete(reservation)
    await session.commit()
