from datetime import date
from typing import AsyncIterator, Iterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from memory_api.core.config import Settings
from memory_api.core.kv import MemoryKeyValueStore
from memory_api.main import create_app
from memory_api.services.aggregator import ScoreAggregator
from memory_api.services.recorder import SessionRecorder
from memory_api.services.score_store import ScoreRecordStore

TODAY = date(2024, 3, 5)
NOW_MS = 1_709_640_000_000


class CountingStore(MemoryKeyValueStore):
    """In-memory store that remembers which keys were read and written."""

    def __init__(self) -> None:
        super().__init__()
        self.reads: list[str] = []
        self.writes: list[str] = []

    async def get(self, key):
        self.reads.append(key)
        return await super().get(key)

    async def set(self, key, value):
        self.writes.append(key)
        await super().set(key, value)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        kv_backend="memory",
        jwt_secret_key="test-secret-key-with-enough-bytes-for-hs256",
    )


@pytest.fixture
def store() -> CountingStore:
    return CountingStore()


@pytest.fixture
def records(store) -> ScoreRecordStore:
    return ScoreRecordStore(store)


@pytest.fixture
def recorder(records) -> SessionRecorder:
    return SessionRecorder(records, today=lambda: TODAY, now_ms=lambda: NOW_MS)


@pytest.fixture
def aggregator(records) -> ScoreAggregator:
    return ScoreAggregator(records, today=lambda: TODAY)


@pytest.fixture(scope="function")
def test_app(settings, store) -> Iterator[FastAPI]:
    app = create_app(settings=settings, store=store)
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def registered(client: AsyncClient) -> dict:
    resp = await client.post(
        "/api/register", json={"email": "Player@Example.com", "password": "secret123"}
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def auth_headers(registered: dict) -> dict:
    return {"Authorization": f"Bearer {registered['token']}"}
