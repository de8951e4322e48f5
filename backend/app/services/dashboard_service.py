"""Reservation metrics and the departing/returning schedule."""

from __future__ import annotations

import calendar
import enum
import uuid
from collections.abc import Sequence
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.reservation import Reservation, ReservationStatus
from app.schemas.reservation import ReservationCounts


class ScheduleRange(str, enum.Enum):
    """Named windows offered by the schedule board."""

    TODAY = "today"
    TOMORROW = "tomorrow"
    NEXT_7_DAYS = "next7days"
    NEXT_WEEK = "nextWeek"
    NEXT_MONTH = "nextMonth"


def _add_month(value: date) -> date:
    year, month = (value.year + 1, 1) if value.month == 12 else (value.year, value.month + 1)
    last_day = calendar.monthrange(year, month)[1]
    return value.replace(year=year, month=month, day=min(value.day, last_day))


def resolve_date_range(
    range_name: ScheduleRange | str, *, today: date | None = None
) -> tuple[date, date]:
    """Return ``(start, end)`` for a named window; ``end`` is exclusive."""
    today = today or date.today()
    window = ScheduleRange(range_name)
    if window is ScheduleRange.TOMORROW:
        start = today + timedelta(days=1)
        return start, start + timedelta(days=1)
    if window is ScheduleRange.NEXT_7_DAYS:
        return today, today + timedelta(days=7)
    if window is ScheduleRange.NEXT_WEEK:
        start = today + timedelta(days=7)
        return start, start + timedelta(days=7)
    if window is ScheduleRange.NEXT_MONTH:
        return today, _add_month(today)
    return today, today + timedelta(days=1)


async def reservation_counts(
    session: AsyncSession, *, business_id: uuid.UUID
) -> ReservationCounts:
    """Count the business's reservations per status."""
    result = await session.execute(
        select(Reservation.status, func.count(Reservation.id))
        .where(Reservation.business_id == business_id)
        .group_by(Reservation.status)
    )
    counts = {status.value: 0 for status in ReservationStatus}
    for status, total in result.all():
        counts[ReservationStatus(status).value] = int(total)
    return ReservationCounts(**counts)


async def departing_reservations(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    range_name: ScheduleRange | str = ScheduleRange.TODAY,
    today: date | None = None,
) -> Sequence[Reservation]:
    """Reserved orders whose rental starts inside the window."""
    start, end = resolve_date_range(range_name, today=today)
    result = await session.execute(
        select(Reservation)
        .options(selectinload(Reservation.items))
        .where(
            Reservation.business_id == business_id,
            Reservation.status == ReservationStatus.RESERVED,
            Reservation.start_date >= start,
            Reservation.start_date < end,
        )
        .order_by(Reservation.start_date)
    )
    return result.scalars().unique().all()


async def returning_reservations(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    range_name: ScheduleRange | str = ScheduleRange.TODAY,
    today: date | None = None,
) -> Sequence[Reservation]:
    """Checked-out orders due back inside the window."""
    start, end = resolve_date_range(range_name, today=today)
    result = await session.execute(
        select(Reservation)
        .options(selectinload(Reservation.items))
        .where(
            Reservation.business_id == business_id,
            Reservation.status == ReservationStatus.IN_USE,
            Reservation.end_date >= start,
            Reservation.end_date < end,
        )
        .order_by(Reservation.end_date)
    )
    return result.scalars().unique().all()
