"""Comment repository over the record store, one instance per channel."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any, TypeVar

from memberportal.comments.audience import ChannelLayout, layout_for
from memberportal.config import Settings, settings as default_settings
from memberportal.errors.exceptions import NotFoundError, ValidationError
from memberportal.models.comment import Comment
from memberportal.models.enums import Channel
from memberportal.store import fields as F
from memberportal.store.base import RecordNotFoundError, RecordStore, RowFilter

logger = logging.getLogger(__name__)

T = TypeVar("T")


def validate_comment_text(text: Any, max_length: int) -> str:
    """Return the trimmed body or raise ValidationError."""
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Comment text is required")
    if len(text) > max_length:
        raise ValidationError(
            f"Comment is too long (max {max_length} characters)",
            details={"max_length": max_length, "length": len(text)},
        )
    return text.strip()


def _link_ids(value: Any) -> list[int]:
    return [item["id"] for item in value or [] if isinstance(item, dict) and "id" in item]


def _sort_key(created_at: datetime | None, row_id: int) -> tuple[float, int]:
    ts = created_at.timestamp() if created_at else float("-inf")
    return (-ts, row_id)


def newest_first(items: Iterable[T], created=lambda c: c.created_at, ident=lambda c: c.id) -> list[T]:
    """Sort by creation time descending; equal timestamps fall back to id ascending."""
    return sorted(items, key=lambda c: _sort_key(created(c), ident(c)))


class ActiveCommentView:
    """Read boundary over one comment table that hides soft-deleted rows.

    Every read path goes through here so the ``Is Deleted`` exclusion is
    applied in exactly one place.
    """

    def __init__(self, store: RecordStore, table_id: int, resource_name: str, page_size: int = 200):
        self.store = store
        self.table_id = table_id
        self.resource_name = resource_name
        self.page_size = page_size

    @staticmethod
    def is_active(row: dict[str, Any]) -> bool:
        return not row.get(F.COMMENT_IS_DELETED)

    async def list_for_deal(self, deal_id: int, extra_filters: list[RowFilter] | None = None) -> list[dict[str, Any]]:
        filters = [RowFilter(F.COMMENT_DEAL, "link_row_has", deal_id), *(extra_filters or [])]
        rows = await self.store.list_all_rows(self.table_id, filters=filters, size=self.page_size)
        return [row for row in rows if self.is_active(row)]

    async def get_any(self, row_id: int) -> dict[str, Any]:
        """Fetch a row whether or not it is soft-deleted."""
        try:
            return await self.store.get_row(self.table_id, row_id)
        except RecordNotFoundError as exc:
            raise NotFoundError(self.resource_name, row_id) from exc

    async def get(self, row_id: int) -> dict[str, Any]:
        row = await self.get_any(row_id)
        if not self.is_active(row):
            raise NotFoundError(self.resource_name, row_id)
        return row


class CommentRepository:
    """Typed CRUD and soft delete over one channel's comment table."""

    def __init__(self, store: RecordStore, channel: Channel, settings: Settings | None = None):
        self.settings = settings or default_settings
        self.layout: ChannelLayout = layout_for(channel)
        self.store = store
        self.table_id = self.layout.table_id(self.settings)
        self.active = ActiveCommentView(
            store, self.table_id, self.layout.resource_name, page_size=self.settings.baserow_page_size
        )

    @property
    def channel(self) -> Channel:
        return self.layout.channel

    # ------------------------------------------------------------------
    # Row mapping
    # ------------------------------------------------------------------

    def to_comment(self, row: dict[str, Any]) -> Comment:
        authors = (row.get(F.COMMENT_AUTHOR) or []) if self.layout.authored else []
        first_author = authors[0] if authors else {}
        return Comment(
            id=row["id"],
            channel=self.channel,
            deal_ids=_link_ids(row.get(F.COMMENT_DEAL)),
            author_id=first_author.get("id"),
            author_name=first_author.get("value"),
            text=row.get(F.COMMENT_TEXT) or "",
            documents=row.get(F.COMMENT_DOCUMENTS) or [],
            is_anonymous=bool(row.get(F.COMMENT_IS_ANONYMOUS)) if self.channel == Channel.MEMBER else False,
            steerco_only=bool(row.get(F.COMMENT_STEERCO_ONLY)) if self.channel == Channel.MEMBER else False,
            target_member_ids=(
                _link_ids(row.get(F.COMMENT_TARGET_MEMBERS)) if self.channel == Channel.SAMIRA else []
            ),
            is_deleted=bool(row.get(F.COMMENT_IS_DELETED)),
            created_at=row.get(F.COMMENT_CREATED) or None,
            updated_at=row.get(F.COMMENT_UPDATED) or None,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_for_deal(self, deal_id: int, include_steerco_only: bool = False) -> list[Comment]:
        """Non-deleted comments for a deal, newest first."""
        comments = [self.to_comment(row) for row in await self.active.list_for_deal(deal_id)]
        if self.channel == Channel.MEMBER and not include_steerco_only:
            comments = [c for c in comments if not c.steerco_only]
        return newest_first(comments)

    async def list_steerco_only(self, deal_id: int) -> list[Comment]:
        """Member comments routed to the SteerCo view only."""
        if self.channel != Channel.MEMBER:
            raise ValueError("SteerCo-only comments exist only in the member channel")
        rows = await self.active.list_for_deal(
            deal_id, extra_filters=[RowFilter(F.COMMENT_STEERCO_ONLY, "boolean", True)]
        )
        comments = [self.to_comment(row) for row in rows]
        return newest_first(c for c in comments if c.steerco_only)

    async def get_by_id(self, comment_id: int) -> Comment:
        return self.to_comment(await self.active.get(comment_id))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(
        self,
        deal_id: int,
        text: str,
        author_id: int | None = None,
        target_member_ids: list[int] | None = None,
        documents: list[dict[str, Any]] | None = None,
        is_anonymous: bool = False,
        steerco_only: bool = False,
    ) -> Comment:
        body = validate_comment_text(text, self.settings.comment_max_length)

        fields: dict[str, Any] = {
            F.COMMENT_DEAL: [deal_id],
            F.COMMENT_TEXT: body,
            F.COMMENT_DOCUMENTS: documents or [],
            F.COMMENT_IS_DELETED: False,
        }
        if self.layout.authored:
            if author_id is None:
                raise ValueError(f"{self.layout.resource_name} requires an author")
            fields[F.COMMENT_AUTHOR] = [author_id]
        else:
            fields[F.COMMENT_TARGET_MEMBERS] = list(target_member_ids or [])
        if self.channel == Channel.MEMBER:
            fields[F.COMMENT_IS_ANONYMOUS] = bool(is_anonymous)
            fields[F.COMMENT_STEERCO_ONLY] = bool(steerco_only)

        row = await self.store.create_row(self.table_id, fields)
        now = datetime.now(timezone.utc)
        row.setdefault(F.COMMENT_CREATED, now)
        row.setdefault(F.COMMENT_UPDATED, now)
        comment = self.to_comment(row)
        logger.info("Created %s comment %s on deal %s", self.channel, comment.id, deal_id)
        return comment

    async def update(
        self,
        comment_id: int,
        text: str | None = None,
        documents: list[dict[str, Any]] | None = None,
        **flags: bool,
    ) -> Comment:
        """Apply only the provided fields; the store refreshes ``Last Updated``."""
        fields: dict[str, Any] = {}
        if text is not None:
            fields[F.COMMENT_TEXT] = validate_comment_text(text, self.settings.comment_max_length)
        if documents is not None:
            fields[F.COMMENT_DOCUMENTS] = documents
        for name, value in flags.items():
            if value is None:
                continue
            if name not in self.layout.flag_fields:
                raise ValueError(f"{self.layout.resource_name} has no flag '{name}'")
            fields[self.layout.flag_fields[name]] = bool(value)

        await self.active.get(comment_id)
        if not fields:
            return await self.get_by_id(comment_id)

        row = await self.store.update_row(self.table_id, comment_id, fields)
        logger.info("Updated %s comment %s (%s)", self.channel, comment_id, ", ".join(sorted(fields)))
        return self.to_comment(row)

    async def soft_delete(self, comment_id: int) -> None:
        """Mark a comment deleted; deleting an already deleted comment is a no-op."""
        row = await self.active.get_any(comment_id)
        if not self.active.is_active(row):
            return
        await self.store.update_row(self.table_id, comment_id, {F.COMMENT_IS_DELETED: True})
        logger.info("Soft-deleted %s comment %s", self.channel, comment_id)
