"""Pydantic models for deal comments: stored shape, inputs and display views."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from memberportal.models.enums import Channel, CommentSource


class Comment(BaseModel):
    """A comment row as stored, for any channel.

    ``author_id`` is None for Samira comments; ``target_member_ids`` is only
    meaningful for Samira comments; ``is_anonymous`` and ``steerco_only`` only
    for member comments.
    """

    id: int
    channel: Channel
    deal_ids: list[int] = Field(default_factory=list)
    author_id: int | None = None
    author_name: str | None = None
    text: str = ""
    documents: list[dict[str, Any]] = Field(default_factory=list)
    is_anonymous: bool = False
    steerco_only: bool = False
    target_member_ids: list[int] = Field(default_factory=list)
    is_deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def belongs_to(self, deal_id: int) -> bool:
        return deal_id in self.deal_ids


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class _CamelInput(BaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)


class MemberCommentCreate(_CamelInput):
    comment_text: str
    is_anonymous: bool = False
    steerco_only: bool = False
    documents: list[dict[str, Any]] = Field(default_factory=list)


class SteerCoCommentCreate(_CamelInput):
    comment_text: str
    documents: list[dict[str, Any]] = Field(default_factory=list)


# Member row ids: positive JSON integers only, no bool or numeric-string coercion
MemberRowId = Annotated[int, Field(strict=True, gt=0)]


class SamiraCommentCreate(_CamelInput):
    comment_text: str
    target_members: list[MemberRowId] = Field(default_factory=list)
    documents: list[dict[str, Any]] = Field(default_factory=list)


class CommentUpdate(_CamelInput):
    comment_text: str


# ---------------------------------------------------------------------------
# Display views
# ---------------------------------------------------------------------------


class _CamelView(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthorView(_CamelView):
    id: int | None
    name: str


class MemberCommentView(_CamelView):
    id: int
    comment_text: str
    documents: list[dict[str, Any]]
    is_anonymous: bool
    steerco_only: bool
    created_date: datetime | None
    last_updated: datetime | None
    author: AuthorView
    is_own: bool


class SteerCoCommentView(_CamelView):
    id: int
    comment_text: str
    documents: list[dict[str, Any]]
    created_date: datetime | None
    last_updated: datetime | None
    source: CommentSource
    is_anonymous: bool = False
    author: AuthorView
    is_own: bool


class SamiraCommentView(_CamelView):
    id: int
    comment_text: str
    documents: list[dict[str, Any]]
    created_date: datetime | None
    last_updated: datetime | None
    author: AuthorView
    is_targeted: bool
    target_member_count: int


CommentView = MemberCommentView | SteerCoCommentView | SamiraCommentView
