import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_health_ok(client: AsyncClient):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


async def test_ready_pings_db(client: AsyncClient):
    r = await client.get("/health/ready")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


async def test_docs_served(client: AsyncClient):
    assert (await client.get("/docs")).status_code == 200
    r = await client.get("/openapi.json")
    assert r.status_code == 200
    paths = r.json()["paths"]
    assert "/signup" in paths
    assert "/refresh-token/{username}" in paths
