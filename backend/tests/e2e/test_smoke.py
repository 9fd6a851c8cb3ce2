import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_endpoint(client: AsyncClient):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_root_redirects_to_docs(client: AsyncClient):
    r = await client.get("/")
    assert r.status_code in (302, 307)
    assert r.headers["location"] == "/docs"


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client: AsyncClient):
    r = await client.get("/api/nope")
    assert r.status_code == 404
    assert "error" in r.json()
