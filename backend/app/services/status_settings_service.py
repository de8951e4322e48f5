"""Per-business display labels for reservation statuses."""

from __future__ import annotations

import uuid
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.reservation import ReservationStatus, ReservationStatusSetting
from app.schemas.reservation import ReservationStatusLabel

DEFAULT_LABELS: dict[ReservationStatus, str] = {
    ReservationStatus.DRAFT: "Proposal",
    ReservationStatus.RESERVED: "Reserved",
    ReservationStatus.IN_USE: "Checked Out",
    ReservationStatus.CLOSED: "Checked In",
}


async def _stored_settings(
    session: AsyncSession, *, business_id: uuid.UUID
) -> dict[ReservationStatus, ReservationStatusSetting]:
    result = await session.execute(
        select(ReservationStatusSetting).where(
            ReservationStatusSetting.business_id == business_id
        )
    )
    return {setting.status_key: setting for setting in result.scalars().all()}


async def get_status_labels(
    session: AsyncSession, *, business_id: uuid.UUID
) -> list[ReservationStatusLabel]:
    """Return a label for every status, falling back to the defaults."""
    stored = await _stored_settings(session, business_id=business_id)
    labels: list[ReservationStatusLabel] = []
    for status_key, default in DEFAULT_LABELS.items():
        setting = stored.get(status_key)
        labels.append(
            ReservationStatusLabel(
                status_key=status_key,
                label=setting.label if setting is not None else default,
            )
        )
    return labels


async def update_status_labels(
    session: AsyncSession,
    *,
    business_id: uuid.UUID,
    labels: Iterable[ReservationStatusLabel],
) -> list[ReservationStatusLabel]:
    """Upsert the given labels and return the merged set."""
    stored = await _stored_settings(session, business_id=business_id)
    for entry in labels:
        label = entry.label.strip()
        if not label:
            raise ValueError("Status label must not be blank")
        setting = stored.get(entry.status_key)
        if setting is None:
            setting = ReservationStatusSetting(
                business_id=business_id, status_key=entry.status_key, label=label
            )
            session.add(setting)
            stored[entry.status_key] = setting
        else:
            setting.label = label
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    return await get_status_labels(session, business_id=business_id)
