"""API tests for room-service food orders."""

from __future__ import annotations

from decimal import Decimal

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _authenticate(client: AsyncClient, email: str, password: str) -> str:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    return response.json()["access_token"]


async def _guest_booking(client: AsyncClient, app_context) -> tuple[dict[str, str], str]:
    token = await _authenticate(
        client, app_context["guest_email"], app_context["guest_password"]
    )
    headers = {"Authorization": f"Bearer {token}"}
    response = await client.post(
        "/api/v1/bookings",
        json={
            "hotel_id": str(app_context["hotel_id"]),
            "room_number": "102",
            "check_in_date": "2026-11-01",
            "check_out_date": "2026-11-02",
        },
        headers=headers,
    )
    assert response.status_code == 201
    return headers, response.json()["id"]


async def test_order_lines_price_at_current_menu_price(app_context) -> None:
    client: AsyncClient = app_context["client"]
    headers, booking_id = await _guest_booking(client, app_context)

    response = await client.post(
        "/api/v1/orders",
        json={
            "booking_id": booking_id,
            "items": [
                {"menu_item_id": str(app_context["idli_id"]), "quantity": 2},
                {"menu_item_id": str(app_context["coffee_id"]), "quantity": 1},
                {"menu_item_id": str(app_context["idli_id"]), "quantity": 1},
            ],
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["status"] == "pending"
    subtotals = {line["menu_item_id"]: Decimal(line["subtotal"]) for line in body["lines"]}
    assert subtotals == {
        str(app_context["idli_id"]): Decimal("300"),
        str(app_context["coffee_id"]): Decimal("80"),
    }
    assert Decimal(body["total_amount"]) == Decimal("380")

    duplicate = await client.post(
        "/api/v1/orders",
        json={
            "booking_id": booking_id,
            "items": [{"menu_item_id": str(app_context["coffee_id"]), "quantity": 1}],
        },
        headers=headers,
    )
    assert duplicate.status_code == 400


async def test_order_rejects_unknown_items_and_foreign_bookings(app_context) -> None:
    client: AsyncClient = app_context["client"]
    headers, booking_id = await _guest_booking(client, app_context)

    unknown = await client.post(
        "/api/v1/orders",
        json={
            "booking_id": booking_id,
            "items": [
                {"menu_item_id": "00000000-0000-0000-0000-000000000000", "quantity": 1}
            ],
        },
        headers=headers,
    )
    assert unknown.status_code == 400

    empty = await client.post(
        "/api/v1/orders", json={"booking_id": booking_id, "items": []}, headers=headers
    )
    assert empty.status_code == 422

    other_token = await _authenticate(
        client, app_context["other_guest_email"], app_context["other_guest_password"]
    )
    foreign = await client.post(
        "/api/v1/orders",
        json={
            "booking_id": booking_id,
            "items": [{"menu_item_id": str(app_context["coffee_id"]), "quantity": 1}],
        },
        headers={"Authorization": f"Bearer {other_token}"},
    )
    assert foreign.status_code == 404


async def test_staff_advance_order_status(app_context) -> None:
    client: AsyncClient = app_context["client"]
    headers, booking_id = await _guest_booking(client, app_context)
    created = await client.post(
        "/api/v1/orders",
        json={
            "booking_id": booking_id,
            "items": [{"menu_item_id": str(app_context["coffee_id"]), "quantity": 2}],
        },
        headers=headers,
    )
    order_id = created.json()["id"]

    guest_attempt = await client.patch(
        f"/api/v1/orders/{order_id}/status",
        json={"status": "in_progress"},
        headers=headers,
    )
    assert guest_attempt.status_code == 403

    staff_token = await _authenticate(
        client, app_context["staff_email"], app_context["staff_password"]
    )
    staff_headers = {"Authorization": f"Bearer {staff_token}"}
    for next_status in ("in_progress", "delivered"):
        response = await client.patch(
            f"/api/v1/orders/{order_id}/status",
            json={"status": next_status},
            headers=staff_headers,
        )
        assert response.status_code == 200, response.text
        assert response.json()["status"] == next_status

    reopened = await client.patch(
        f"/api/v1/orders/{order_id}/status",
        json={"status": "pending"},
        headers=staff_headers,
    )
    assert reopened.status_code == 400
