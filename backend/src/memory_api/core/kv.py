"""Async key-value storage used for accounts and score records.

Every backend speaks the same tiny protocol (``get``/``set`` of JSON values
by string key). The app factory builds one instance and hands it to request
handlers through ``get_store``; nothing in the package reaches for a global
client.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Protocol

import httpx
from fastapi import Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from ..models.kv_entry import KeyValueEntry, _utcnow
from .config import Settings

logger = logging.getLogger(__name__)


class KeyValueStoreError(RuntimeError):
    """Raised when the storage backend fails to serve a read or write."""


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Optional[Any]:
        ...

    async def set(self, key: str, value: Any) -> None:
        ...

    async def close(self) -> None:
        ...


# ----------------------------
# In-memory
# ----------------------------

class MemoryKeyValueStore:
    """Process-local store. Values are copied through JSON on the way in and out."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    async def close(self) -> None:
        return None


# ----------------------------
# SQL (sqlmodel)
# ----------------------------

def _sqlite_connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        # Required for SQLite when sessions run in the threadpool.
        return {"check_same_thread": False}
    return {}


class SqlKeyValueStore:
    def __init__(self, database_url: str, echo: bool = False) -> None:
        self.engine = create_engine(
            database_url,
            echo=echo,
            connect_args=_sqlite_connect_args(database_url),
        )

    def init_db(self) -> None:
        SQLModel.metadata.create_all(self.engine, tables=[KeyValueEntry.__table__])

    def _get(self, key: str) -> Optional[Any]:
        with Session(self.engine) as session:
            row = session.get(KeyValueEntry, key)
            return None if row is None else json.loads(row.value)

    def _set(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        with Session(self.engine) as session:
            row = session.get(KeyValueEntry, key)
            if row is None:
                row = KeyValueEntry(key=key, value=payload)
            else:
                row.value = payload
                row.updated_at = _utcnow()
            session.add(row)
            session.commit()

    async def get(self, key: str) -> Optional[Any]:
        try:
            return await run_in_threadpool(self._get, key)
        except SQLAlchemyError as exc:
            raise KeyValueStoreError(f"read failed for {key!r}") from exc

    async def set(self, key: str, value: Any) -> None:
        try:
            await run_in_threadpool(self._set, key, value)
        except SQLAlchemyError as exc:
            raise KeyValueStoreError(f"write failed for {key!r}") from exc

    async def close(self) -> None:
        self.engine.dispose()


# ----------------------------
# Redis REST (Vercel KV / Upstash)
# ----------------------------

class RestKeyValueStore:
    """Redis commands over HTTPS: ``POST <url>`` with a JSON command array.

    Values are written JSON-encoded. On read, a value that is not valid JSON
    is returned as the raw string, matching the Vercel KV client.
    """

    def __init__(
        self,
        url: str,
        token: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    async def _command(self, *args: Any) -> Any:
        try:
            r = await self._client.post("/", json=list(args))
            r.raise_for_status()
            body = r.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise KeyValueStoreError(f"{args[0]} failed: {exc}") from exc
        if "error" in body:
            raise KeyValueStoreError(f"{args[0]} failed: {body['error']}")
        return body.get("result")

    async def get(self, key: str) -> Optional[Any]:
        result = await self._command("GET", key)
        if result is None:
            return None
        try:
            return json.loads(result)
        except (TypeError, ValueError):
            return result

    async def set(self, key: str, value: Any) -> None:
        await self._command("SET", key, json.dumps(value))

    async def close(self) -> None:
        await self._client.aclose()


def build_store(settings: Settings) -> KeyValueStore:
    if settings.kv_backend == "memory":
        return MemoryKeyValueStore()
    if settings.kv_backend == "rest":
        if not settings.kv_rest_api_url or not settings.kv_rest_api_token:
            raise RuntimeError("KV_REST_API_URL and KV_REST_API_TOKEN must be set")
        return RestKeyValueStore(
            settings.kv_rest_api_url,
            settings.kv_rest_api_token,
            timeout=settings.kv_timeout_seconds,
        )
    store = SqlKeyValueStore(settings.database_url, echo=settings.database_echo)
    store.init_db()
    logger.info("Using SQL key-value store (%s)", store.engine.url.get_backend_name())
    return store


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store
