"""Reservation management API."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.reservation import Reservation, ReservationStatus
from app.models.user import User
from app.schemas.reservation import (
    ReservationCounts,
    ReservationCreate,
    ReservationRead,
    ReservationScheduleRead,
    ReservationStatusLabel,
    ReservationStatusLabelsUpdate,
    ReservationUpdate,
)
from app.services import dashboard_service, reservation_service, status_settings_service
from app.services.availability_service import AvailabilityConflictError
from app.services.dashboard_service import ScheduleRange

router = APIRouter()


def _translate_write_error(exc: Exception, *, action: str) -> HTTPException:
    if isinstance(exc, AvailabilityConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, IntegrityError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unable to {action} reservation",
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


async def _get_reservation_or_404(
    session: AsyncSession, *, business_id: uuid.UUID, reservation_id: uuid.UUID
) -> Reservation:
    reservation = await reservation_service.get_reservation(
        session, business_id=business_id, reservation_id=reservation_id
    )
    if reservation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found"
        )
    return reservation


@router.get(
    "/status-labels",
    response_model=list[ReservationStatusLabel],
    summary="Reservation status labels",
)
async def get_status_labels(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> list[ReservationStatusLabel]:
    return await status_settings_service.get_status_labels(
        session, business_id=current_user.business_id
    )


@router.put(
    "/status-labels",
    response_model=list[ReservationStatusLabel],
    summary="Update reservation status labels",
)
async def update_status_labels(
    payload: ReservationStatusLabelsUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> list[ReservationStatusLabel]:
    try:
        return await status_settings_service.update_status_labels(
            session, business_id=current_user.business_id, labels=payload.labels
        )
    except (IntegrityError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


@router.get(
    "/metrics", response_model=ReservationCounts, summary="Reservation counts"
)
async def reservation_metrics(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> ReservationCounts:
    return await dashboard_service.reservation_counts(
        session, business_id=current_user.business_id
    )


@router.get(
    "/schedule",
    response_model=ReservationScheduleRead,
    summary="Departing and returning reservations",
)
async def reservation_schedule(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
    departing_range: ScheduleRange = ScheduleRange.TODAY,
    returning_range: ScheduleRange = ScheduleRange.TODAY,
) -> ReservationScheduleRead:
    departing = await dashboard_service.departing_reservations(
        session, business_id=current_user.business_id, range_name=departing_range
    )
    returning = await dashboard_service.returning_reservations(
        session, business_id=current_user.business_id, range_name=returning_range
    )
    return ReservationScheduleRead(
        departing=[ReservationRead.model_validate(obj) for obj in departing],
        returning=[ReservationRead.model_validate(obj) for obj in returning],
    )


@router.get("", response_model=list[ReservationRead], summary="List reservations")
async def list_reservations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
    status_filter: Annotated[ReservationStatus | None, Query(alias="status")] = None,
    skip: int = 0,
    limit: int = 50,
) -> list[ReservationRead]:
    reservations = await reservation_service.list_reservations(
        session,
        business_id=current_user.business_id,
        status=status_filter,
        skip=skip,
        limit=min(limit, 100),
    )
    return [ReservationRead.model_validate(obj) for obj in reservations]


@router.post(
    "",
    response_model=ReservationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create reservation",
)
async def create_reservation(
    payload: ReservationCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> ReservationRead:
    try:
        reservation = await reservation_service.create_reservation(
            session,
            business_id=current_user.business_id,
            start_date=payload.start_date,
            end_date=payload.end_date,
            items=payload.items,
            customer_id=payload.customer_id,
            customer=payload.customer,
            status=payload.status,
            discount_type=payload.discount_type,
            discount_amount=payload.discount_amount,
            notes=payload.notes,
        )
    except (IntegrityError, ValueError) as exc:
        raise _translate_write_error(exc, action="create") from exc
    return ReservationRead.model_validate(reservation)


@router.get(
    "/{reservation_id}", response_model=ReservationRead, summary="Get reservation"
)
async def get_reservation(
    reservation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> ReservationRead:
    reservation = await _get_reservation_or_404(
        session, business_id=current_user.business_id, reservation_id=reservation_id
    )
    return ReservationRead.model_validate(reservation)


@router.patch(
    "/{reservation_id}", response_model=ReservationRead, summary="Update reservation"
)
async def update_reservation(
    reservation_id: uuid.UUID,
    payload: ReservationUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> ReservationRead:
    reservation = await _get_reservation_or_404(
        session, business_id=current_user.business_id, reservation_id=reservation_id
    )
    try:
        updated = await reservation_service.update_reservation(
            session,
            reservation=reservation,
            business_id=current_user.business_id,
            customer_id=payload.customer_id,
            customer=payload.customer,
            start_date=payload.start_date,
            end_date=payload.end_date,
            status=payload.status,
            discount_type=payload.discount_type,
            discount_amount=payload.discount_amount,
            notes=payload.notes,
            items=payload.items,
        )
    except (IntegrityError, ValueError) as exc:
        raise _translate_write_error(exc, action="update") from exc
    return ReservationRead.model_validate(updated)


@router.delete(
    "/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete reservation",
)
async def delete_reservation(
    reservation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> None:
    reservation = await _get_reservation_or_404(
        session, business_id=current_user.business_id, reservation_id=reservation_id
    )
    await reservation_service.delete_reservation(
        session, reservation=reservation, business_id=current_user.business_id
    )
