"""Baserow record store adapter using the REST API via httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from memberportal.store.base import (
    RecordNotFoundError,
    RecordStore,
    RecordStoreError,
    RowFilter,
    RowPage,
)

logger = logging.getLogger(__name__)


def _filter_params(filters: list[RowFilter] | None) -> dict[str, str]:
    params: dict[str, str] = {}
    for f in filters or []:
        value = f.value
        if isinstance(value, bool):
            value = "1" if value else "0"
        params[f"filter__{f.field}__{f.type}"] = str(value)
    return params


class BaserowClient(RecordStore):
    """Talks to ``/api/database/rows/table/{table_id}/`` with user field names.

    Authentication uses a database token (``Authorization: Token <key>``).
    A shared ``httpx.AsyncClient`` may be injected; otherwise one is opened
    per request.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._http_client = http_client

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        if not self.api_key:
            raise RecordStoreError("Baserow API key is not configured")

        url = f"{self.base_url}{path}"
        headers = {
            "Authorization": f"Token {self.api_key}",
            "Content-Type": "application/json",
        }
        query = {"user_field_names": "true", **(params or {})}

        try:
            if self._http_client is not None:
                response = await self._http_client.request(
                    method, url, params=query, json=json, headers=headers, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.request(
                        method, url, params=query, json=json, headers=headers, timeout=self.timeout
                    )
        except httpx.HTTPError as exc:
            logger.warning("Baserow %s %s failed: %s", method, path, exc)
            raise RecordStoreError(f"Failed to reach Baserow: {exc}") from exc

        if response.status_code == 404:
            raise RecordNotFoundError(
                f"Baserow row not found: {path}", status_code=404, body=response.text
            )
        if response.status_code >= 400:
            logger.warning(
                "Baserow %s %s returned %s: %s", method, path, response.status_code, response.text[:500]
            )
            raise RecordStoreError(
                f"Baserow API error: {response.reason_phrase}",
                status_code=response.status_code,
                body=response.text,
            )
        return response.json()

    # ------------------------------------------------------------------
    # RecordStore
    # ------------------------------------------------------------------

    async def list_rows(
        self,
        table_id: int,
        filters: list[RowFilter] | None = None,
        page: int = 1,
        size: int = 100,
        search: str | None = None,
    ) -> RowPage:
        params = {"page": str(page), "size": str(size), **_filter_params(filters)}
        if search:
            params["search"] = search
        data = await self._request("GET", f"/api/database/rows/table/{table_id}/", params=params)
        return RowPage(
            count=data.get("count", 0),
            results=data.get("results", []),
            next=data.get("next"),
            previous=data.get("previous"),
        )

    async def get_row(self, table_id: int, row_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/api/database/rows/table/{table_id}/{row_id}/")

    async def create_row(self, table_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", f"/api/database/rows/table/{table_id}/", json=fields)

    async def update_row(self, table_id: int, row_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PATCH", f"/api/database/rows/table/{table_id}/{row_id}/", json=fields)
