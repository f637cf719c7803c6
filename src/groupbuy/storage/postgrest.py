"""
PostgREST client for the hosted data store (Supabase REST API).

Rows are plain dicts; repositories translate them to aggregates. Every failure,
HTTP status or transport, surfaces as DataStoreError.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from groupbuy.core.config import Settings
from groupbuy.core.errors import DataStoreError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class PostgrestClient:
    """
    Thin async wrapper over ``{data_store_url}/rest/v1/{table}``.

    The underlying httpx.AsyncClient is created on first request and closed by
    ``aclose()`` (registered as an application shutdown hook by DataStoreModule).
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._base_url = settings.data_store_url.rstrip("/") + "/rest/v1"
        self._key = settings.data_store_key
        self._timeout = settings.request_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._key,
            "Authorization": f"Bearer {self._key}",
        }

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._headers(),
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        returning: bool = False,
    ) -> Any:
        headers = {"Prefer": "return=representation"} if returning else {}
        try:
            response = await self.client.request(method, f"/{table}", params=params, json=json, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("%s %s failed with %s: %s", method, table, e.response.status_code, e.response.text[:200])
            raise DataStoreError(f"{method} {table} failed: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.exception("%s %s: transport error", method, table)
            raise DataStoreError(f"{method} {table} failed: {e}") from e
        if not response.content:
            return None
        return response.json()

    async def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        *,
        order: str | None = None,
    ) -> list[Row]:
        """SELECT * with equality filters; order like "created_at.desc"."""
        params = {"select": "*"}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{value}"
        if order:
            params["order"] = order
        rows = await self._request("GET", table, params=params)
        return list(rows or [])

    async def select_one(self, table: str, id: str) -> Row | None:
        rows = await self.select(table, {"id": id})
        return rows[0] if rows else None

    async def insert(self, table: str, row: Row) -> Row:
        created = await self._request("POST", table, json=row, returning=True)
        if isinstance(created, list):
            return created[0] if created else row
        return created or row

    async def update(self, table: str, id: str, values: Row) -> list[Row]:
        updated = await self._request("PATCH", table, params={"id": f"eq.{id}"}, json=values, returning=True)
        return list(updated or [])

    async def delete(self, table: str, id: str) -> list[Row]:
        deleted = await self._request("DELETE", table, params={"id": f"eq.{id}"}, returning=True)
        return list(deleted or [])
