"""Abstract record store interface over a remote row-oriented table service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class RecordStoreError(Exception):
    """A record store request failed (transport error or non-2xx response)."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class RecordNotFoundError(RecordStoreError):
    """The addressed row does not exist."""


@dataclass(frozen=True)
class RowFilter:
    """A single field filter, e.g. ``RowFilter("Deal", "link_row_has", 12)``."""

    field: str
    type: str
    value: Any


@dataclass
class RowPage:
    """One page of a row listing."""

    count: int
    results: list[dict[str, Any]] = field(default_factory=list)
    next: str | None = None
    previous: str | None = None


class RecordStore(ABC):
    """Generic get/list/create/update over remote tables.

    Rows are plain dicts addressed by user-facing field names; every row
    carries an integer ``id``.
    """

    @abstractmethod
    async def list_rows(
        self,
        table_id: int,
        filters: list[RowFilter] | None = None,
        page: int = 1,
        size: int = 100,
        search: str | None = None,
    ) -> RowPage:
        """Return one page of rows matching all ``filters``."""
        ...

    @abstractmethod
    async def get_row(self, table_id: int, row_id: int) -> dict[str, Any]:
        """Return a single row or raise :class:`RecordNotFoundError`."""
        ...

    @abstractmethod
    async def create_row(self, table_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        """Create a row and return it as stored."""
        ...

    @abstractmethod
    async def update_row(self, table_id: int, row_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        """Apply ``fields`` to an existing row and return it as stored."""
        ...

    async def list_all_rows(
        self,
        table_id: int,
        filters: list[RowFilter] | None = None,
        size: int = 200,
        search: str | None = None,
    ) -> list[dict[str, Any]]:
        """Follow pagination until the listing is exhausted."""
        rows: list[dict[str, Any]] = []
        page = 1
        while True:
            result = await self.list_rows(table_id, filters=filters, page=page, size=size, search=search)
            rows.extend(result.results)
            if not result.next or not result.results:
                return rows
            page += 1
