"""API tests for menu items."""

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


async def test_menu_listing_filters_by_category(app_context) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/menu-items", params={"category": "beverages"})
    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == ["Coffee"]

    everything = await client.get("/api/v1/menu-items")
    assert len(everything.json()) == 2


async def test_manager_creates_and_renames_item(app_context) -> None:
    client: AsyncClient = app_context["client"]
    token = await _authenticate(
        client, app_context["manager_email"], app_context["manager_password"]
    )
    headers = {"Authorization": f"Bearer {token}"}

    created = await client.post(
        "/api/v1/menu-items",
        json={
            "name": "Masala Dosa",
            "price": "120.00",
            "category": "breakfast",
            "food_type": "veg",
        },
        headers=headers,
    )
    assert created.status_code == 201, created.text
    item_id = created.json()["id"]

    duplicate = await client.post(
        "/api/v1/menu-items",
        json={
            "name": "Masala Dosa",
            "price": "90.00",
            "category": "breakfast",
            "food_type": "veg",
        },
        headers=headers,
    )
    assert duplicate.status_code == 400

    renamed = await client.patch(
        f"/api/v1/menu-items/{item_id}",
        json={"name": "Ghee Masala Dosa"},
        headers=headers,
    )
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Ghee Masala Dosa"
    assert Decimal(renamed.json()["price"]) == Decimal("120")


async def test_patch_price_propagates_to_orders(app_context) -> None:
    client: AsyncClient = app_context["client"]
    guest_token = await _authenticate(
        client, app_context["guest_email"], app_context["guest_password"]
    )
    guest_headers = {"Authorization": f"Bearer {guest_token}"}
    booking = await client.post(
        "/api/v1/bookings",
        json={
            "hotel_id": str(app_context["hotel_id"]),
            "room_number": "101",
            "check_in_date": "2026-10-20",
            "check_out_date": "2026-10-21",
        },
        headers=guest_headers,
    )
    order = await client.post(
        "/api/v1/orders",
        json={
            "booking_id": booking.json()["id"],
            "items": [{"menu_item_id": str(app_context["coffee_id"]), "quantity": 3}],
        },
        headers=guest_headers,
    )
    assert order.status_code == 201

    manager_token = await _authenticate(
        client, app_context["manager_email"], app_context["manager_password"]
    )
    response = await client.patch(
        f"/api/v1/menu-items/{app_context['coffee_id']}",
        json={"price": "90", "food_type": "veg"},
        headers={"Authorization": f"Bearer {manager_token}"},
    )
    assert response.status_code == 200, response.text
    assert Decimal(response.json()["price"]) == Decimal("90")
    assert response.json()["food_type"] == "veg"

    refreshed = await client.get(
        f"/api/v1/orders/{order.json()['id']}", headers=guest_headers
    )
    assert Decimal(refreshed.json()["total_amount"]) == Decimal("270")


async def test_delete_blocked_while_ordered(app_context) -> None:
    client: AsyncClient = app_context["client"]
    guest_token = await _authenticate(
        client, app_context["guest_email"], app_context["guest_password"]
    )
    guest_headers = {"Authorization": f"Bearer {guest_token}"}
    booking = await client.post(
        "/api/v1/bookings",
        json={
            "hotel_id": str(app_context["hotel_id"]),
            "room_number": "202",
            "check_in_date": "2026-10-20",
            "check_out_date": "2026-10-22",
        },
        headers=guest_headers,
    )
    await client.post(
        "/api/v1/orders",
        json={
            "booking_id": booking.json()["id"],
            "items": [{"menu_item_id": str(app_context["idli_id"]), "quantity": 1}],
        },
        headers=guest_headers,
    )

    manager_token = await _authenticate(
        client, app_context["manager_email"], app_context["manager_password"]
    )
    manager_headers = {"Authorization": f"Bearer {manager_token}"}
    blocked = await client.delete(
        f"/api/v1/menu-items/{app_context['idli_id']}", headers=manager_headers
    )
    assert blocked.status_code == 400

    deleted = await client.delete(
        f"/api/v1/menu-items/{app_context['coffee_id']}", headers=manager_headers
    )
    assert deleted.status_code == 204
    missing = await client.get(f"/api/v1/menu-items/{app_context['coffee_id']}")
    assert missing.status_code == 404


async def test_patch_rejected_rename_keeps_price(app_context) -> None:
    client: AsyncClient = app_context["client"]
    token = await _authenticate(
        client, app_context["manager_email"], app_context["manager_password"]
    )
    headers = {"Authorization": f"Bearer {token}"}
    url = f"/api/v1/menu-items/{app_context['idli_id']}"

    clash = await client.patch(
        url, json={"name": "Coffee", "price": "150"}, headers=headers
    )
    assert clash.status_code == 400
    assert clash.json()["detail"] == "Duplicate menu item name"

    item = (await client.get(url)).json()
    assert item["name"] == "Idli Sambar (2pcs)"
    assert Decimal(item["price"]) == Decimal("100")
    lookup = await client.get(f"/api/v1/pricing/menu_item/{app_context['idli_id']}")
    assert Decimal(lookup.json()["unit_price"]) == Decimal("100")


@pytest.mark.parametrize("price", ["NaN", "twelve", 0])
async def test_patch_invalid_price_keeps_name(app_context, price) -> None:
    client: AsyncClient = app_context["client"]
    token = await _authenticate(
        client, app_context["manager_email"], app_context["manager_password"]
    )
    url = f"/api/v1/menu-items/{app_context['idli_id']}"

    response = await client.patch(
        url,
        json={"name": "Rava Idli", "price": price},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 400
    assert response.json()["kind"] == "InvalidArgument"

    item = (await client.get(url)).json()
    assert item["name"] == "Idli Sambar (2pcs)"
    assert Decimal(item["price"]) == Decimal("100")


async def test_unavailable_items_drop_out_of_search_and_orders(app_context) -> None:
    client: AsyncClient = app_context["client"]
    manager_token = await _authenticate(
        client, app_context["manager_email"], app_context["manager_password"]
    )
    guest_token = await _authenticate(
        client, app_context["guest_email"], app_context["guest_password"]
    )
    guest_headers = {"Authorization": f"Bearer {guest_token}"}

    found = await client.get("/api/v1/menu-items/search", params={"q": "cof"})
    assert [item["name"] for item in found.json()] == ["Coffee"]
    assert found.json()[0]["is_available"] is True

    denied = await client.put(
        f"/api/v1/menu-items/{app_context['coffee_id']}/availability",
        json={"is_available": False},
        headers=guest_headers,
    )
    assert denied.status_code == 403

    toggled = await client.put(
        f"/api/v1/menu-items/{app_context['coffee_id']}/availability",
        json={"is_available": False},
        headers={"Authorization": f"Bearer {manager_token}"},
    )
    assert toggled.status_code == 200
    assert toggled.json()["is_available"] is False

    hidden = await client.get("/api/v1/menu-items/search", params={"q": "COF"})
    assert hidden.json() == []
    breakfast = await client.get(
        "/api/v1/menu-items/search", params={"category": "breakfast"}
    )
    assert [item["name"] for item in breakfast.json()] == ["Idli Sambar (2pcs)"]
    assert len((await client.get("/api/v1/menu-items")).json()) == 2

    booking = await client.post(
        "/api/v1/bookings",
        json={
            "hotel_id": str(app_context["hotel_id"]),
            "room_number": "102",
            "check_in_date": "2026-10-20",
            "check_out_date": "2026-10-21",
        },
        headers=guest_headers,
    )
    order = await client.post(
        "/api/v1/orders",
        json={
            "booking_id": booking.json()["id"],
            "items": [{"menu_item_id": str(app_context["coffee_id"]), "quantity": 1}],
        },
        headers=guest_headers,
    )
    assert order.status_code == 400
    assert order.json()["detail"] == "Menu item Coffee is not available"
