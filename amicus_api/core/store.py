"""
Row store (Supabase) connection management and the subscriptions insert.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

import structlog
from postgrest.exceptions import APIError
from postgrest.types import ReturnMethod
from supabase import AsyncClient, acreate_client

from amicus_api.core.config import get_settings

log = structlog.get_logger()

# Postgres SQLSTATE for unique_violation, passed through by PostgREST.
UNIQUE_VIOLATION_CODE = "23505"

_client: AsyncClient | None = None


class RowStoreError(Exception):
    """A failure reported by the row store itself (as opposed to transport errors)."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.hint = hint

    @property
    def is_unique_violation(self) -> bool:
        return self.code == UNIQUE_VIOLATION_CODE


class RowStore:
    """Inserts rows into a single table and returns the stored representation.

    The client is fetched on each insert rather than at construction, so a
    store that cannot be reached only fails the request that writes to it.
    """

    def __init__(
        self, get_client: Callable[[], Awaitable[AsyncClient]], table: str
    ) -> None:
        self._get_client = get_client
        self._table = table

    @property
    def table(self) -> str:
        return self._table

    async def insert(self, row: dict[str, Any]) -> list[dict[str, Any]]:
        client = await self._get_client()
        try:
            response = await (
                client.table(self._table)
                .insert([row], returning=ReturnMethod.representation)
                .execute()
            )
        except APIError as exc:
            raise RowStoreError(
                exc.message or str(exc),
                code=exc.code,
                details=exc.details,
                hint=exc.hint,
            ) from exc
        return response.data or []


async def get_store_client() -> AsyncClient:
    """Get or create the shared Supabase client."""
    global _client
    if _client is None:
        settings = get_settings()
        _client = await acreate_client(settings.supabase_url, settings.supabase_anon_key)
        log.info("store.client_created", url=settings.supabase_url)
    return _client


async def close_store_client() -> None:
    """Drop the shared client, closing its PostgREST session."""
    global _client
    if _client is not None:
        await _client.postgrest.aclose()
        _client = None
        log.info("store.client_closed")


def get_row_store() -> RowStore:
    """FastAPI dependency for the subscriptions table. Does no I/O."""
    return RowStore(get_store_client, get_settings().subscriptions_table)
