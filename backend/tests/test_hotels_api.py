"""API tests for hotels, room types, and rooms."""

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


async def test_hotel_catalog_management(app_context) -> None:
    client: AsyncClient = app_context["client"]
    token = await _authenticate(
        client, app_context["manager_email"], app_context["manager_password"]
    )
    headers = {"Authorization": f"Bearer {token}"}

    created = await client.post(
        "/api/v1/hotels",
        json={
            "name": "The Leela Palace",
            "location": "Bangalore",
            "address": "23, Old Airport Road, Bangalore",
            "rating": "4.9",
            "base_price_per_night": "22000.00",
        },
        headers=headers,
    )
    assert created.status_code == 201, created.text
    hotel_id = created.json()["id"]

    in_bangalore = await client.get("/api/v1/hotels", params={"location": "bangalore"})
    assert [hotel["name"] for hotel in in_bangalore.json()] == ["The Leela Palace"]

    suite = await client.post(
        "/api/v1/room-types",
        json={"name": "Suite", "max_capacity": 4, "price_multiplier": "2.00"},
        headers=headers,
    )
    assert suite.status_code == 201

    room = await client.post(
        f"/api/v1/hotels/{hotel_id}/rooms",
        json={"room_number": "301", "room_type_id": suite.json()["id"]},
        headers=headers,
    )
    assert room.status_code == 201
    assert room.json()["status"] == "vacant"

    duplicate_room = await client.post(
        f"/api/v1/hotels/{hotel_id}/rooms",
        json={"room_number": "301", "room_type_id": suite.json()["id"]},
        headers=headers,
    )
    assert duplicate_room.status_code == 400

    updated = await client.patch(
        f"/api/v1/hotels/{hotel_id}",
        json={"rating": "4.7", "base_price_per_night": "1.00"},
        headers=headers,
    )
    assert updated.status_code == 200
    assert Decimal(updated.json()["rating"]) == Decimal("4.7")
    # nightly rate only changes through the pricing endpoint
    assert Decimal(updated.json()["base_price_per_night"]) == Decimal("22000")


async def test_catalog_writes_require_manager(app_context) -> None:
    client: AsyncClient = app_context["client"]
    token = await _authenticate(
        client, app_context["staff_email"], app_context["staff_password"]
    )
    response = await client.post(
        "/api/v1/room-types",
        json={"name": "Presidential", "max_capacity": 6, "price_multiplier": "3.00"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 403

    listing = await client.get("/api/v1/room-types")
    assert [room_type["name"] for room_type in listing.json()] == ["Standard", "Deluxe"]


async def test_check_availability_excludes_overlapping_stays(app_context) -> None:
    client: AsyncClient = app_context["client"]
    token = await _authenticate(
        client, app_context["guest_email"], app_context["guest_password"]
    )
    booking = await client.post(
        "/api/v1/bookings",
        json={
            "hotel_id": str(app_context["hotel_id"]),
            "room_number": "201",
            "check_in_date": "2026-12-10",
            "check_out_date": "2026-12-13",
        },
        headers={"Authorization": f"Bearer {token}"},
    )
    assert booking.status_code == 201
    url = f"/api/v1/hotels/{app_context['hotel_id']}/rooms/check-availability"

    deluxe = await client.post(
        url,
        json={
            "check_in_date": "2026-12-11",
            "check_out_date": "2026-12-12",
            "room_type_id": str(app_context["deluxe_id"]),
        },
    )
    assert deluxe.status_code == 200
    body = deluxe.json()
    assert body["available"] is True
    assert [room["room_number"] for room in body["rooms"]] == ["202"]

    after = await client.post(
        url, json={"check_in_date": "2026-12-13", "check_out_date": "2026-12-14"}
    )
    assert [room["room_number"] for room in after.json()["rooms"]] == [
        "101",
        "102",
        "201",
        "202",
    ]

    backwards = await client.post(
        url, json={"check_in_date": "2026-12-13", "check_out_date": "2026-12-13"}
    )
    assert backwards.status_code == 422


async def test_staff_sets_room_status(app_context) -> None:
    client: AsyncClient = app_context["client"]
    staff_token = await _authenticate(
        client, app_context["staff_email"], app_context["staff_password"]
    )
    guest_token = await _authenticate(
        client, app_context["guest_email"], app_context["guest_password"]
    )
    rooms = await client.get(f"/api/v1/hotels/{app_context['hotel_id']}/rooms")
    room_id = next(r["id"] for r in rooms.json() if r["room_number"] == "102")
    url = f"/api/v1/hotels/{app_context['hotel_id']}/rooms/{room_id}"

    denied = await client.patch(
        url,
        json={"status": "cleaning"},
        headers={"Authorization": f"Bearer {guest_token}"},
    )
    assert denied.status_code == 403

    updated = await client.patch(
        url,
        json={"status": "cleaning"},
        headers={"Authorization": f"Bearer {staff_token}"},
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "cleaning"

    missing = await client.patch(
        f"/api/v1/hotels/{app_context['hotel_id']}/rooms/{app_context['deluxe_id']}",
        json={"status": "vacant"},
        headers={"Authorization": f"Bearer {staff_token}"},
    )
    assert missing.status_code == 404


async def test_hotel_delete_refused_while_stays_are_active(app_context) -> None:
    client: AsyncClient = app_context["client"]
    manager_token = await _authenticate(
        client, app_context["manager_email"], app_context["manager_password"]
    )
    guest_token = await _authenticate(
        client, app_context["guest_email"], app_context["guest_password"]
    )
    manager_headers = {"Authorization": f"Bearer {manager_token}"}
    guest_headers = {"Authorization": f"Bearer {guest_token}"}
    hotel_id = app_context["hotel_id"]

    booking = await client.post(
        "/api/v1/bookings",
        json={
            "hotel_id": str(hotel_id),
            "room_number": "101",
            "check_in_date": "2026-12-01",
            "check_out_date": "2026-12-02",
        },
        headers=guest_headers,
    )
    booking_id = booking.json()["id"]
    order = await client.post(
        "/api/v1/orders",
        json={
            "booking_id": booking_id,
            "items": [{"menu_item_id": str(app_context["idli_id"]), "quantity": 2}],
        },
        headers=guest_headers,
    )
    assert order.status_code == 201

    denied = await client.delete(f"/api/v1/hotels/{hotel_id}", headers=guest_headers)
    assert denied.status_code == 403

    blocked = await client.delete(f"/api/v1/hotels/{hotel_id}", headers=manager_headers)
    assert blocked.status_code == 400
    assert blocked.json()["detail"] == "Hotel has active bookings"

    cancelled = await client.post(
        f"/api/v1/bookings/{booking_id}/cancel", headers=guest_headers
    )
    assert cancelled.status_code == 200

    deleted = await client.delete(f"/api/v1/hotels/{hotel_id}", headers=manager_headers)
    assert deleted.status_code == 204
    assert (await client.get(f"/api/v1/hotels/{hotel_id}")).status_code == 404
    assert (
        await client.get(f"/api/v1/orders/{order.json()['id']}", headers=guest_headers)
    ).status_code == 404
    assert (await client.get(f"/api/v1/pricing/room_rate/{hotel_id}")).status_code == 404

    # the menu item is no longer referenced by any order line
    freed = await client.delete(
        f"/api/v1/menu-items/{app_context['idli_id']}", headers=manager_headers
    )
    assert freed.status_code == 204
