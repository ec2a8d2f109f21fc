"""Pydantic models for the authenticated viewer and profile updates."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Viewer(BaseModel):
    """The caller resolved from a session: portal user linked to a member row."""

    model_config = ConfigDict(frozen=True)

    member_id: int
    user_id: str
    email: str = ""
    name: str | None = None


class ProfileUpdateResult(BaseModel):
    changed_fields: list[str]
    member: dict[str, Any]

    @property
    def has_changes(self) -> bool:
        return bool(self.changed_fields)


class LinkedOption(BaseModel):
    """One selectable row of a linked-record option table."""

    id: int
    value: str
