"""Inventory availability checks against committed reservations."""

from __future__ import annotations

import datetime
import logging
import uuid
from dataclasses import asdict, dataclass
from typing import Any

from sqlalchemy import and_, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.core.config import get_settings
from app.models.inventory import InventoryItem
from app.models.reservation import Reservation, ReservationItem, ReservationStatus
from app.services.pricing_service import DateLike, coerce_date

logger = logging.getLogger(__name__)

COMMITTED_STATUSES = frozenset({ReservationStatus.RESERVED, ReservationStatus.IN_USE})


class AvailabilityConflictError(ValueError):
    """Raised when committing a reservation would overbook an item."""

    def __init__(
        self, inventory_item_id: uuid.UUID, *, requested: int, available: int
    ) -> None:
        self.inventory_item_id = inventory_item_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Only {available} available for this period (requested {requested})"
        )


@dataclass(slots=True)
class AvailabilityResult:
    """Outcome of an availability check.

    ``available_quantity`` is not clamped: a negative value means the item is
    already overbooked for part of the range.
    """

    available: bool
    available_quantity: int
    total_quantity: int
    reserved_quantity: int
    error: str | None = None

    @classmethod
    def failure(cls, error: str) -> AvailabilityResult:
        return cls(
            available=False,
            available_quantity=0,
            total_quantity=0,
            reserved_quantity=0,
            error=error,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def overlap_clause(
    start_date: datetime.date,
    end_date: datetime.date,
    *,
    half_open: bool | None = None,
) -> ColumnElement[bool]:
    """Return the SQL predicate selecting reservations that overlap the range."""
    if half_open is None:
        half_open = get_settings().availability_half_open
    if half_open:
        return and_(
            Reservation.end_date > start_date, Reservation.start_date < end_date
        )
    return and_(Reservation.end_date >= start_date, Reservation.start_date <= end_date)


async def reserved_quantity(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    inventory_item_id: uuid.UUID,
    start_date: datetime.date,
    end_date: datetime.date,
    exclude_reservation_id: uuid.UUID | None = None,
) -> int:
    """Sum every committed line for the item across overlapping reservations."""
    stmt = (
        select(func.coalesce(func.sum(ReservationItem.quantity), 0))
        .join(Reservation, ReservationItem.reservation_id == Reservation.id)
        .where(
            Reservation.business_id == business_id,
            ReservationItem.inventory_item_id == inventory_item_id,
            Reservation.status.in_(COMMITTED_STATUSES),
            overlap_clause(start_date, end_date),
        )
    )
    if exclude_reservation_id is not None:
        stmt = stmt.where(Reservation.id != exclude_reservation_id)
    result = await session.execute(stmt)
    return int(result.scalar_one())


async def check_availability(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    inventory_item_id: uuid.UUID,
    requested_quantity: int,
    start_date: DateLike,
    end_date: DateLike,
    exclude_reservation_id: uuid.UUID | None = None,
) -> AvailabilityResult:
    """Report whether ``requested_quantity`` of an item is free for the range.

    This is advisory. Lookup failures and invalid input fail closed.
    """
    if (
        isinstance(requested_quantity, bool)
        or not isinstance(requested_quantity, int)
        or requested_quantity <= 0
    ):
        return AvailabilityResult.failure("Requested quantity must be a positive integer")
    start = coerce_date(start_date)
    end = coerce_date(end_date)
    if start is None or end is None:
        return AvailabilityResult.failure("Start and end dates are required")
    if start > end:
        return AvailabilityResult.failure("End date must not be before start date")

    try:
        item = await session.get(InventoryItem, inventory_item_id)
        if item is None or item.business_id != business_id:
            logger.info(
                "Availability check for unknown inventory item %s", inventory_item_id
            )
            return AvailabilityResult.failure("Inventory item not found")
        reserved = await reserved_quantity(
            session,
            business_id=business_id,
            inventory_item_id=inventory_item_id,
            start_date=start,
            end_date=end,
            exclude_reservation_id=exclude_reservation_id,
        )
    except SQLAlchemyError:
        logger.exception(
            "Availability lookup failed for inventory item %s", inventory_item_id
        )
        return AvailabilityResult.failure("Inventory lookup failed")

    available_quantity = item.quantity - reserved
    return AvailabilityResult(
        available=available_quantity >= requested_quantity,
        available_quantity=available_quantity,
        total_quantity=item.quantity,
        reserved_quantity=reserved,
    )
