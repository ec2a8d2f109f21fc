"""Member profile read and reconciled update."""

from __future__ import annotations

import logging
from typing import Any

from memberportal.config import Settings, settings as default_settings
from memberportal.errors.exceptions import NotFoundError, ValidationError
from memberportal.models.member import LinkedOption, ProfileUpdateResult
from memberportal.profile.fields import linked_option_tables
from memberportal.profile.reconciliation import build_update_payload, diff
from memberportal.store.base import RecordNotFoundError, RecordStore

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, store: RecordStore, settings: Settings | None = None):
        self.store = store
        self.settings = settings or default_settings

    async def get_profile(self, member_id: int) -> dict[str, Any]:
        try:
            return await self.store.get_row(self.settings.members_table_id, member_id)
        except RecordNotFoundError as exc:
            raise NotFoundError("Member", member_id) from exc

    async def update_profile(self, member_id: int, patch: dict[str, Any]) -> ProfileUpdateResult:
        """Write only the fields whose value differs from the live record.

        When nothing differs no write is issued and ``changed_fields`` is empty.
        """
        if not isinstance(patch, dict):
            raise ValidationError("Profile update must be an object")

        current = await self.get_profile(member_id)
        changes = diff(current, patch)
        if not changes:
            return ProfileUpdateResult(changed_fields=[], member=current)

        payload = build_update_payload(changes)
        logger.info("Updating member %s fields: %s", member_id, ", ".join(sorted(payload)))
        updated = await self.store.update_row(self.settings.members_table_id, member_id, payload)
        return ProfileUpdateResult(changed_fields=sorted(payload), member=updated)

    async def linked_options(self, table_id: int, display_field: str | None = None) -> list[LinkedOption]:
        """Rows of a linked-record option table as ``{id, value}`` choices.

        Only tables backing a linked-record profile field can be listed.
        """
        tables = linked_option_tables(self.settings)
        if table_id not in tables:
            raise ValidationError("Table is not a profile option table", details={"table_id": table_id})

        display = display_field or tables[table_id]
        rows = await self.store.list_all_rows(table_id, size=self.settings.baserow_page_size)
        return [
            LinkedOption(id=row["id"], value=str(row.get(display) or row.get("Name") or f"Record {row['id']}"))
            for row in rows
        ]
