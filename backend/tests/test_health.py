"""Health endpoint smoke test."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_healthcheck_returns_ok(app_context) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["database"] == "ok"
    assert payload["service"] == "Hotel Pricing API"
    assert payload["price_propagation_mode"] == "atomic"
    assert "x-request-id" in response.headers


async def test_root_returns_service_name(app_context) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/")
    assert response.json() == {"message": "Hotel Pricing API"}
