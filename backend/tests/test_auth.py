"""API tests for guest registration and login."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_register_then_login(app_context) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "email": "New.Guest@example.com",
            "password": "Welc0me!2026",
            "first_name": "Meera",
            "last_name": "Iyer",
        },
    )
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["user"]["role"] == "guest"
    assert body["user"]["email"] == "new.guest@example.com"
    assert body["token"]["access_token"]

    duplicate = await client.post(
        "/api/v1/auth/register",
        json={
            "email": "new.guest@example.com",
            "password": "Welc0me!2026",
            "first_name": "Meera",
            "last_name": "Iyer",
        },
    )
    assert duplicate.status_code == 400

    login = await client.post(
        "/api/v1/auth/token",
        data={"username": "new.guest@example.com", "password": "Welc0me!2026"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert login.status_code == 200
    assert login.json()["token_type"] == "bearer"


async def test_wrong_password_is_rejected(app_context) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": app_context["guest_email"], "password": "not-it"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 401
