"""Status labels, metrics and schedule endpoint tests."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _book(
    client: AsyncClient,
    headers: dict[str, str],
    item_id: str,
    *,
    start: date,
    end: date,
    statuses: tuple[str, ...] = (),
) -> str:
    created = await client.post(
        "/api/v1/reservations",
        json={
            "customer": {"name": f"Guest {start.isoformat()}"},
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "items": [
                {"inventory_item_id": item_id, "quantity": 1, "rate_type": "daily"}
            ],
        },
        headers=headers,
    )
    assert created.status_code == 201, created.text
    reservation_id = created.json()["id"]
    for status_value in statuses:
        response = await client.patch(
            f"/api/v1/reservations/{reservation_id}",
            json={"status": status_value},
            headers=headers,
        )
        assert response.status_code == 200, response.text
    return reservation_id


async def _item(client: AsyncClient, headers: dict[str, str]) -> str:
    response = await client.post(
        "/api/v1/inventory",
        json={"name": "Cooler", "quantity": 20, "daily_rate": "5"},
        headers=headers,
    )
    return response.json()["id"]


async def test_status_labels_default_and_override(
    app_context: dict[str, Any], auth_headers: dict[str, str]
) -> None:
    client: AsyncClient = app_context["client"]

    defaults = await client.get(
        "/api/v1/reservations/status-labels", headers=auth_headers
    )
    assert defaults.status_code == 200
    assert {row["status_key"]: row["label"] for row in defaults.json()} == {
        "draft": "Proposal",
        "reserved": "Reserved",
        "in_use": "Checked Out",
        "closed": "Checked In",
    }

    updated = await client.put(
        "/api/v1/reservations/status-labels",
        json={"labels": [{"status_key": "draft", "label": "Quote"}]},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    labels = {row["status_key"]: row["label"] for row in updated.json()}
    assert labels["draft"] == "Quote"
    assert labels["closed"] == "Checked In"

    again = await client.put(
        "/api/v1/reservations/status-labels",
        json={"labels": [{"status_key": "draft", "label": "Estimate"}]},
        headers=auth_headers,
    )
    assert {row["status_key"]: row["label"] for row in again.json()}["draft"] == (
        "Estimate"
    )

    blank = await client.put(
        "/api/v1/reservations/status-labels",
        json={"labels": [{"status_key": "draft", "label": "   "}]},
        headers=auth_headers,
    )
    assert blank.status_code == 400


async def test_metrics_count_per_status(
    app_context: dict[str, Any], auth_headers: dict[str, str]
) -> None:
    client: AsyncClient = app_context["client"]
    item_id = await _item(client, auth_headers)
    start = date(2025, 3, 1)
    end = date(2025, 3, 2)
    await _book(client, auth_headers, item_id, start=start, end=end)
    await _book(client, auth_headers, item_id, start=start, end=end)
    await _book(client, auth_headers, item_id, start=start, end=end, statuses=("reserved",))
    await _book(
        client,
        auth_headers,
        item_id,
        start=start,
        end=end,
        statuses=("reserved", "in_use", "closed"),
    )

    response = await client.get("/api/v1/reservations/metrics", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"draft": 2, "reserved": 1, "in_use": 0, "closed": 1}


async def test_schedule_lists_departures_and_returns(
    app_context: dict[str, Any], auth_headers: dict[str, str]
) -> None:
    client: AsyncClient = app_context["client"]
    item_id = await _item(client, auth_headers)
    today = date.today()

    departing_today = await _book(
        client,
        auth_headers,
        item_id,
        start=today,
        end=today + timedelta(days=2),
        statuses=("reserved",),
    )
    departing_later = await _book(
        client,
        auth_headers,
        item_id,
        start=today + timedelta(days=3),
        end=today + timedelta(days=5),
        statuses=("reserved",),
    )
    returning_tomorrow = await _book(
        client,
        auth_headers,
        item_id,
        start=today - timedelta(days=2),
        end=today + timedelta(days=1),
        statuses=("reserved", "in_use"),
    )
    await _book(client, auth_headers, item_id, start=today, end=today + timedelta(days=1))

    response = await client.get("/api/v1/reservations/schedule", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert [row["id"] for row in body["departing"]] == [departing_today]
    assert body["returning"] == []

    wider = await client.get(
        "/api/v1/reservations/schedule",
        params={"departing_range": "next7days", "returning_range": "tomorrow"},
        headers=auth_headers,
    )
    body = wider.json()
    assert [row["id"] for row in body["departing"]] == [
        departing_today,
        departing_later,
    ]
    assert [row["id"] for row in body["returning"]] == [returning_tomorrow]

    invalid = await client.get(
        "/api/v1/reservations/schedule",
        params={"departing_range": "someday"},
        headers=auth_headers,
    )
    assert invalid.status_code == 422
