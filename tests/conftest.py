"""Shared pytest fixtures and configuration for the bgimport test suite.

Provides project-wide fixtures used across the unit tests: forced DEBUG
logging, an isolated environment for settings tests, an in-memory database,
and a catalog client backed by :class:`httpx.MockTransport`.
"""

from __future__ import annotations

import json
import os
from collections.abc import AsyncIterator, Callable

import aiosqlite
import httpx
import pytest
from pydantic_settings import SettingsConfigDict

from bgimport.catalog.client import CatalogClient
from bgimport.core import configure_logging
from bgimport.core.settings import Settings
from bgimport.storage.database import create_schema
from bgimport.storage.repository import BgRepository

#: URL the mocked catalog answers on.
TEST_CATALOG_URL = "https://catalog.test/bgs.json"


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _configure_test_logging() -> None:
    """Force DEBUG logging in text format for every test."""
    configure_logging(level="DEBUG", fmt="text", force=True)


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove bgimport env vars and disable ``.env`` loading for one test."""
    for key in list(os.environ):
        if key.lower() in Settings.model_fields:
            monkeypatch.delenv(key, raising=False)

    monkeypatch.setattr(
        Settings,
        "model_config",
        SettingsConfigDict(
            env_file=None,
            env_file_encoding="utf-8",
            extra="ignore",
        ),
    )


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture()
async def conn() -> AsyncIterator[aiosqlite.Connection]:
    """An in-memory autocommit SQLite connection with the bgimport schema applied."""
    connection: aiosqlite.Connection = await aiosqlite.connect(":memory:", isolation_level=None)
    connection.row_factory = aiosqlite.Row
    await create_schema(connection)
    try:
        yield connection
    finally:
        await connection.close()


@pytest.fixture()
def repo(conn: aiosqlite.Connection) -> BgRepository:
    return BgRepository(conn)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def catalog_body(names: list[str]) -> bytes:
    """Encode *names* the way the real catalog does."""
    return json.dumps([{"name": name} for name in names]).encode()


@pytest.fixture()
def make_catalog() -> Callable[..., CatalogClient]:
    """Factory for a :class:`CatalogClient` served by a mock transport.

    Call with ``names=[...]`` for a well-formed catalog, or with
    ``handler=`` to control the response completely.  Every request the
    client makes is appended to ``client.requests`` for assertions.
    """

    def _factory(
        *,
        names: list[str] | None = None,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> CatalogClient:
        requests: list[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if handler is not None:
                return handler(request)
            return httpx.Response(200, content=catalog_body(names or []))

        client = CatalogClient(TEST_CATALOG_URL, transport=httpx.MockTransport(_handle))
        client.requests = requests  # type: ignore[attr-defined]
        return client

    return _factory

