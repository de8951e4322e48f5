"""Pricing quote endpoint tests."""

from __future__ import annotations

import uuid
from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_quote_uses_inventory_rates(
    app_context: dict[str, Any], auth_headers: dict[str, str]
) -> None:
    client: AsyncClient = app_context["client"]
    item = await client.post(
        "/api/v1/inventory",
        json={"name": "E-bike", "quantity": 5, "daily_rate": "50.00"},
        headers=auth_headers,
    )
    item_id = item.json()["id"]

    response = await client.post(
        "/api/v1/pricing/quote",
        json={
            "start_date": "2025-01-01",
            "end_date": "2025-01-04",
            "items": [
                {"inventory_item_id": item_id, "quantity": 2, "rate_type": "daily"},
                {"quantity": 1, "rate_type": "weekly", "rate_amount": "80"},
            ],
            "discount_type": "percentage",
            "discount_amount": "10",
        },
        headers=auth_headers,
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["lines"][0]["description"] == "E-bike"
    assert body["lines"][0]["duration"] == 3
    assert body["lines"][0]["subtotal"] == "300.00"
    assert body["lines"][1]["subtotal"] == "80.00"
    assert body["subtotal"] == "380.00"
    assert body["discount_total"] == "38.00"
    assert body["total"] == "342.00"


async def test_fixed_discount_never_goes_negative(
    app_context: dict[str, Any], auth_headers: dict[str, str]
) -> None:
    client: AsyncClient = app_context["client"]

    response = await client.post(
        "/api/v1/pricing/quote",
        json={
            "start_date": "2025-01-01",
            "end_date": "2025-01-02",
            "items": [{"quantity": 1, "rate_type": "daily", "rate_amount": "50"}],
            "discount_type": "fixed",
            "discount_amount": "80",
        },
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["total"] == "0.00"


@pytest.mark.parametrize(
    "overrides",
    [
        {"start_date": "2025-01-05", "end_date": "2025-01-01"},
        {"items": [{"quantity": 0, "rate_type": "daily", "rate_amount": "5"}]},
        {"discount_type": "percentage", "discount_amount": "150"},
    ],
)
async def test_invalid_quotes_return_422(
    app_context: dict[str, Any],
    auth_headers: dict[str, str],
    overrides: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    payload: dict[str, Any] = {
        "start_date": "2025-01-01",
        "end_date": "2025-01-03",
        "items": [{"quantity": 1, "rate_type": "daily", "rate_amount": "5"}],
    }
    payload.update(overrides)

    response = await client.post(
        "/api/v1/pricing/quote", json=payload, headers=auth_headers
    )

    assert response.status_code == 422


async def test_quote_for_unknown_item_is_not_found(
    app_context: dict[str, Any], auth_headers: dict[str, str]
) -> None:
    client: AsyncClient = app_context["client"]

    response = await client.post(
        "/api/v1/pricing/quote",
        json={
            "start_date": "2025-01-01",
            "end_date": "2025-01-03",
            "items": [
                {
                    "inventory_item_id": str(uuid.uuid4()),
                    "quantity": 1,
                    "rate_type": "daily",
                }
            ],
        },
        headers=auth_headers,
    )

    assert response.status_code == 404
