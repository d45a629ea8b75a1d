"""
Shared fixtures for API tests.
"""

from __future__ import annotations

import os

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("LOG_FORMAT", "text")

from typing import Any, Optional
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from amicus_api.core import store as store_module
from amicus_api.core.config import get_settings
from amicus_api.core.log import configure_logging
from amicus_api.core.store import get_row_store
from amicus_api.main import app


class FakeRowStore:
    """In-memory stand-in for RowStore.

    Echoes inserted rows back with an id, or raises ``error`` if set.
    """

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.inserted: list[dict[str, Any]] = []

    async def insert(self, row: dict[str, Any]) -> list[dict[str, Any]]:
        if self.error is not None:
            raise self.error
        self.inserted.append(row)
        return [{"id": len(self.inserted), **row}]


@pytest.fixture
def store():
    fake = FakeRowStore()
    app.dependency_overrides[get_row_store] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_row_store, None)


@pytest.fixture
async def client(store):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def raw_client():
    """Client wired to the real store dependency; server errors come back as responses."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def unreachable_store(monkeypatch):
    """Make building the Supabase client fail, and count the attempts."""
    factory = AsyncMock(side_effect=RuntimeError("Invalid URL"))
    monkeypatch.setattr(store_module, "_client", None)
    monkeypatch.setattr(store_module, "acreate_client", factory)
    return factory


@pytest.fixture
def restore_logging():
    yield
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
