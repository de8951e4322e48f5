"""Pricing-related API endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.user import User
from app.schemas.pricing import PricingQuoteRead, PricingQuoteRequest
from app.services import inventory_service, pricing_service

router = APIRouter()


@router.post("/quote", response_model=PricingQuoteRead, summary="Quote order pricing")
async def quote_order_pricing(
    payload: PricingQuoteRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_active_user)],
) -> PricingQuoteRead:
    """Price line items over a date range without persisting anything.

    Lines that reference an inventory item and omit ``rate_amount`` are priced
    at the item's current rate for the chosen rate type.
    """
    lines: list[pricing_service.LineInput] = []
    for requested in payload.items:
        rate_amount = requested.rate_amount
        description = None
        if requested.inventory_item_id is not None:
            item = await inventory_service.get_item(
                session,
                business_id=current_user.business_id,
                item_id=requested.inventory_item_id,
            )
            if item is None:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Inventory item not found",
                )
            description = item.name
            if rate_amount is None:
                rate_amount = pricing_service.rate_for(item, requested.rate_type)
        lines.append(
            pricing_service.LineInput(
                quantity=requested.quantity,
                rate_type=requested.rate_type,
                rate_amount=rate_amount,
                inventory_item_id=requested.inventory_item_id,
                description=description,
            )
        )

    try:
        discount = pricing_service.build_discount(
            payload.discount_type, payload.discount_amount
        )
    except pricing_service.PricingValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc

    outcome = pricing_service.quote_order(
        lines,
        start_date=payload.start_date,
        end_date=payload.end_date,
        discount=discount,
    )
    if not outcome.ok:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": outcome.error, **outcome.details},
        )
    return PricingQuoteRead.model_validate(outcome.quote)
