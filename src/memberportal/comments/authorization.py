"""Per-request authorization checks for deal comments."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from memberportal.errors.exceptions import AuthorizationError, NotFoundError
from memberportal.models.comment import Comment
from memberportal.models.enums import Channel
from memberportal.models.member import Viewer
from memberportal.store import fields as F
from memberportal.store.base import RecordNotFoundError, RecordStore

logger = logging.getLogger(__name__)


class AdminDirectory(ABC):
    """Answers whether an email belongs to a portal administrator."""

    @abstractmethod
    async def is_admin(self, email: str) -> bool:
        ...


class StoreAdminDirectory(AdminDirectory):
    """Administrator roster kept as a table in the record store.

    The store search is fuzzy, so results are confirmed with an exact,
    case-insensitive email comparison.
    """

    def __init__(self, store: RecordStore, table_id: int):
        self.store = store
        self.table_id = table_id

    async def is_admin(self, email: str) -> bool:
        if not email:
            return False
        page = await self.store.list_rows(self.table_id, search=email, size=10)
        wanted = email.strip().lower()
        return any(
            (row.get(F.ADMIN_EMAIL) or "").strip().lower() == wanted
            for row in page.results
        )


class AuthorizationGate:
    """State-free policy checks; every call hits the record store afresh."""

    def __init__(self, store: RecordStore, admin_directory: AdminDirectory, deals_table_id: int):
        self.store = store
        self.admin_directory = admin_directory
        self.deals_table_id = deals_table_id

    async def get_deal(self, deal_id: int) -> dict[str, Any]:
        try:
            return await self.store.get_row(self.deals_table_id, deal_id)
        except RecordNotFoundError as exc:
            raise NotFoundError("Deal", deal_id) from exc

    async def steerco_member_ids(self, deal_id: int) -> set[int]:
        deal = await self.get_deal(deal_id)
        return {m["id"] for m in deal.get(F.DEAL_STEERCO_MEMBERS) or [] if isinstance(m, dict) and "id" in m}

    async def is_member_on_steerco(self, deal_id: int, member_id: int) -> bool:
        """True iff the member is on the deal's steering committee.

        An unknown deal has no committee.
        """
        try:
            return member_id in await self.steerco_member_ids(deal_id)
        except NotFoundError:
            return False

    async def require_steerco(self, deal_id: int, viewer: Viewer, action: str = "view") -> None:
        if not await self.is_member_on_steerco(deal_id, viewer.member_id):
            raise AuthorizationError(f"Only steering committee members can {action} SteerCo comments")

    async def require_admin(self, viewer: Viewer) -> None:
        if not await self.admin_directory.is_admin(viewer.email):
            raise AuthorizationError("Only administrators can manage Samira comments")

    @staticmethod
    def require_author(comment: Comment, viewer: Viewer, action: str = "modify") -> None:
        if comment.author_id is None or comment.author_id != viewer.member_id:
            raise AuthorizationError(f"You can only {action} your own comments")

    async def authorize_modification(
        self,
        comment: Comment,
        deal_id: int,
        viewer: Viewer,
        action: str = "modify",
    ) -> None:
        """Gate edit/delete of an existing, non-deleted comment.

        A comment addressed through the wrong deal is reported as not found.
        """
        if not comment.belongs_to(deal_id):
            raise NotFoundError("Comment", comment.id)
        if comment.channel == Channel.SAMIRA:
            await self.require_admin(viewer)
        else:
            self.require_author(comment, viewer, action)
