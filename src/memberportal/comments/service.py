"""Deal discussion service: the per-channel operations exposed to request handlers."""

from __future__ import annotations

import asyncio
import logging

from memberportal.comments.authorization import AdminDirectory, AuthorizationGate
from memberportal.comments.repository import CommentRepository
from memberportal.comments.visibility import (
    member_comment_view,
    member_feed,
    samira_comment_view,
    samira_feed,
    steerco_comment_view,
    steerco_view,
)
from memberportal.config import Settings, settings as default_settings
from memberportal.models.comment import (
    Comment,
    CommentView,
    MemberCommentCreate,
    SamiraCommentCreate,
    SteerCoCommentCreate,
)
from memberportal.models.enums import Channel, CommentSource
from memberportal.models.member import Viewer
from memberportal.store.base import RecordStore

logger = logging.getLogger(__name__)


class DiscussionService:
    """listVisible / create / update / softDelete for each channel.

    Every write is authorized before it reaches a repository.
    """

    def __init__(
        self,
        store: RecordStore,
        admin_directory: AdminDirectory,
        settings: Settings | None = None,
    ):
        self.settings = settings or default_settings
        self.repos = {channel: CommentRepository(store, channel, self.settings) for channel in Channel}
        self.gate = AuthorizationGate(store, admin_directory, self.settings.deals_table_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_visible(self, channel: Channel, deal_id: int, viewer: Viewer) -> list[CommentView]:
        if channel == Channel.MEMBER:
            comments = await self.repos[Channel.MEMBER].list_for_deal(deal_id, include_steerco_only=False)
            return member_feed(comments, viewer.member_id)

        if channel == Channel.STEERCO:
            _, views = await self.steerco_listing(deal_id, viewer)
            return views

        comments = await self.repos[Channel.SAMIRA].list_for_deal(deal_id)
        return samira_feed(comments, viewer.member_id)

    async def is_member_on_steerco(self, deal_id: int, viewer: Viewer) -> bool:
        return await self.gate.is_member_on_steerco(deal_id, viewer.member_id)

    async def steerco_listing(self, deal_id: int, viewer: Viewer) -> tuple[bool, list[CommentView]]:
        """Committee membership and the merged SteerCo view, from one deal read.

        Non-members get an empty list.
        """
        if not await self.is_member_on_steerco(deal_id, viewer):
            logger.debug("Member %s is not on the SteerCo of deal %s", viewer.member_id, deal_id)
            return False, []
        steerco_comments, member_comments = await asyncio.gather(
            self.repos[Channel.STEERCO].list_for_deal(deal_id),
            self.repos[Channel.MEMBER].list_steerco_only(deal_id),
        )
        return True, steerco_view(steerco_comments, member_comments, viewer.member_id)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_member_comment(
        self, deal_id: int, viewer: Viewer, payload: MemberCommentCreate
    ) -> CommentView:
        if payload.steerco_only:
            await self.gate.require_steerco(deal_id, viewer, action="post")
        else:
            await self.gate.get_deal(deal_id)
        comment = await self.repos[Channel.MEMBER].create(
            deal_id,
            payload.comment_text,
            author_id=viewer.member_id,
            documents=payload.documents,
            is_anonymous=payload.is_anonymous,
            steerco_only=payload.steerco_only,
        )
        return self._view(self._with_author_name(comment, viewer), viewer)

    async def create_steerco_comment(
        self, deal_id: int, viewer: Viewer, payload: SteerCoCommentCreate
    ) -> CommentView:
        await self.gate.require_steerco(deal_id, viewer, action="post")
        comment = await self.repos[Channel.STEERCO].create(
            deal_id,
            payload.comment_text,
            author_id=viewer.member_id,
            documents=payload.documents,
        )
        return self._view(self._with_author_name(comment, viewer), viewer)

    async def create_samira_comment(
        self, deal_id: int, viewer: Viewer, payload: SamiraCommentCreate
    ) -> CommentView:
        await self.gate.require_admin(viewer)
        targets = _dedupe_targets(payload.target_members)
        await self.gate.get_deal(deal_id)
        comment = await self.repos[Channel.SAMIRA].create(
            deal_id,
            payload.comment_text,
            target_member_ids=targets,
            documents=payload.documents,
        )
        return self._view(comment, viewer)

    async def create(self, channel: Channel, deal_id: int, viewer: Viewer, payload) -> CommentView:
        creators = {
            Channel.MEMBER: self.create_member_comment,
            Channel.STEERCO: self.create_steerco_comment,
            Channel.SAMIRA: self.create_samira_comment,
        }
        return await creators[channel](deal_id, viewer, payload)

    async def update(
        self,
        channel: Channel,
        deal_id: int,
        comment_id: int,
        viewer: Viewer,
        new_text: str,
    ) -> CommentView:
        repo = self.repos[channel]
        comment = await repo.get_by_id(comment_id)
        await self.gate.authorize_modification(comment, deal_id, viewer, action="edit")
        updated = await repo.update(comment_id, text=new_text)
        return self._view(updated, viewer)

    async def soft_delete(self, channel: Channel, deal_id: int, comment_id: int, viewer: Viewer) -> None:
        repo = self.repos[channel]
        comment = await repo.get_by_id(comment_id)
        await self.gate.authorize_modification(comment, deal_id, viewer, action="delete")
        await repo.soft_delete(comment_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _with_author_name(comment: Comment, viewer: Viewer) -> Comment:
        if comment.author_name or not viewer.name:
            return comment
        return comment.model_copy(update={"author_name": viewer.name})

    @staticmethod
    def _view(comment: Comment, viewer: Viewer) -> CommentView:
        if comment.channel == Channel.SAMIRA:
            return samira_comment_view(comment)
        if comment.channel == Channel.STEERCO:
            return steerco_comment_view(comment, viewer.member_id, CommentSource.STEERCO)
        return member_comment_view(comment, viewer.member_id)


def _dedupe_targets(target_members: list[int]) -> list[int]:
    """Deduplicate target member ids, preserving order."""
    targets: list[int] = []
    for member_id in target_members:
        if member_id not in targets:
            targets.append(member_id)
    return targets
