"""Tests for GET /health: 200, tenant required, correlation ID in response."""

import pytest
from httpx import ASGITransport, AsyncClient

from timesheet_access.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def test_health_returns_200_with_tenant(client: AsyncClient):
    r = await client.get("/health", headers={"X-Tenant-ID": "t1"})
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["tenant_id"] == "t1"
    assert data["version"]


async def test_health_does_not_need_actor(client: AsyncClient):
    r = await client.get("/health", headers={"X-Tenant-ID": "t1"})
    assert r.status_code == 200


async def test_health_tenant_header_required(client: AsyncClient):
    r = await client.get("/health")
    assert r.status_code == 400
