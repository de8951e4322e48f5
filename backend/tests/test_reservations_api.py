"""Reservation API integration tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _create_item(
    client: AsyncClient, headers: dict[str, str], *, quantity: int = 2
) -> str:
    response = await client.post(
        "/api/v1/inventory",
        json={
            "name": "Pontoon boat",
            "quantity": quantity,
            "daily_rate": "150.00",
            "hourly_rate": "30.00",
        },
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["id"]


def _payload(item_id: str, *, quantity: int = 1, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "customer": {"name": "Casey Shore", "email": "casey@example.com"},
        "start_date": "2025-05-01",
        "end_date": "2025-05-03",
        "items": [
            {"inventory_item_id": item_id, "quantity": quantity, "rate_type": "daily"}
        ],
    }
    payload.update(overrides)
    return payload


async def test_reservation_lifecycle(
    app_context: dict[str, Any], auth_headers: dict[str, str]
) -> None:
    client: AsyncClient = app_context["client"]
    item_id = await _create_item(client, auth_headers)

    created = await client.post(
        "/api/v1/reservations",
        json=_payload(
            item_id, discount_type="fixed", discount_amount="20", notes="Dock B"
        ),
        headers=auth_headers,
    )
    assert created.status_code == 201, created.text
    body = created.json()
    assert body["status"] == "draft"
    assert body["total_price"] == "280.00"
    assert body["items"][0]["rate_amount"] == "150.00"
    assert body["items"][0]["subtotal"] == "300.00"
    reservation_id = body["id"]

    for status_value in ("reserved", "in_use", "closed"):
        response = await client.patch(
            f"/api/v1/reservations/{reservation_id}",
            json={"status": status_value},
            headers=auth_headers,
        )
        assert response.status_code == 200, response.text
        assert response.json()["status"] == status_value

    reopened = await client.patch(
        f"/api/v1/reservations/{reservation_id}",
        json={"status": "reserved"},
        headers=auth_headers,
    )
    assert reopened.status_code == 400

    listed = await client.get(
        "/api/v1/reservations", params={"status": "closed"}, headers=auth_headers
    )
    assert [row["id"] for row in listed.json()] == [reservation_id]

    deleted = await client.delete(
        f"/api/v1/reservations/{reservation_id}", headers=auth_headers
    )
    assert deleted.status_code == 204
    missing = await client.get(
        f"/api/v1/reservations/{reservation_id}", headers=auth_headers
    )
    assert missing.status_code == 404


async def test_client_supplied_totals_are_ignored(
    app_context: dict[str, Any], auth_headers: dict[str, str]
) -> None:
    client: AsyncClient = app_context["client"]
    item_id = await _create_item(client, auth_headers)
    payload = _payload(item_id, quantity=2)
    payload["total_price"] = "1.00"
    payload["items"][0]["subtotal"] = "1.00"

    response = await client.post("/api/v1/reservations", json=payload, headers=auth_headers)

    assert response.status_code == 201
    assert response.json()["total_price"] == "600.00"
    assert response.json()["items"][0]["subtotal"] == "600.00"


async def test_overbooking_returns_conflict(
    app_context: dict[str, Any], auth_headers: dict[str, str]
) -> None:
    client: AsyncClient = app_context["client"]
    item_id = await _create_item(client, auth_headers, quantity=2)

    first = await client.post(
        "/api/v1/reservations",
        json=_payload(item_id, quantity=2, status="reserved"),
        headers=auth_headers,
    )
    assert first.status_code == 201

    second = await client.post(
        "/api/v1/reservations",
        json=_payload(
            item_id,
            quantity=1,
            status="reserved",
            start_date="2025-05-02",
            end_date="2025-05-06",
        ),
        headers=auth_headers,
    )
    assert second.status_code == 409
    assert "available" in second.json()["detail"]

    draft = await client.post(
        "/api/v1/reservations",
        json=_payload(item_id, quantity=1),
        headers=auth_headers,
    )
    assert draft.status_code == 201

    promote = await client.patch(
        f"/api/v1/reservations/{draft.json()['id']}",
        json={"status": "reserved"},
        headers=auth_headers,
    )
    assert promote.status_code == 409

    listed = await client.get("/api/v1/reservations", headers=auth_headers)
    assert len(listed.json()) == 2


@pytest.mark.parametrize(
    "overrides",
    [
        {"start_date": "2025-05-03", "end_date": "2025-05-03"},
        {"start_date": "2025-05-04", "end_date": "2025-05-03"},
        {"customer": None},
    ],
)
async def test_invalid_reservations_are_rejected(
    app_context: dict[str, Any],
    auth_headers: dict[str, str],
    overrides: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    item_id = await _create_item(client, auth_headers)

    response = await client.post(
        "/api/v1/reservations", json=_payload(item_id, **overrides), headers=auth_headers
    )

    assert response.status_code == 400


@pytest.mark.parametrize(
    "overrides",
    [
        {"status": "archived"},
        {"items": []},
    ],
)
async def test_malformed_reservations_fail_validation(
    app_context: dict[str, Any],
    auth_headers: dict[str, str],
    overrides: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    item_id = await _create_item(client, auth_headers)

    response = await client.post(
        "/api/v1/reservations", json=_payload(item_id, **overrides), headers=auth_headers
    )

    assert response.status_code == 422


async def test_update_reprices_after_date_change(
    app_context: dict[str, Any], auth_headers: dict[str, str]
) -> None:
    client: AsyncClient = app_context["client"]
    item_id = await _create_item(client, auth_headers)
    created = await client.post(
        "/api/v1/reservations",
        json=_payload(item_id, discount_type="percentage", discount_amount="50"),
        headers=auth_headers,
    )
    reservation_id = created.json()["id"]
    assert created.json()["total_price"] == "150.00"

    response = await client.patch(
        f"/api/v1/reservations/{reservation_id}",
        json={"end_date": "2025-05-05"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["total_price"] == "300.00"
    assert response.json()["items"][0]["rate_amount"] == "150.00"
