"""Visibility rules and display transforms for the three comment channels.

Everything here is pure: inputs are comments already read through the
repository (soft-deleted rows are never present) plus the viewer's member id.
"""

from __future__ import annotations

from collections.abc import Iterable

from memberportal.comments.repository import newest_first
from memberportal.models.comment import (
    AuthorView,
    Comment,
    MemberCommentView,
    SamiraCommentView,
    SteerCoCommentView,
)
from memberportal.models.enums import CommentSource

ANONYMOUS_AUTHOR_NAME = "Anonymous Member"
ORGANIZATION_AUTHOR_NAME = "Samira"
UNKNOWN_AUTHOR_NAME = "Unknown"


def _true_author(comment: Comment) -> AuthorView:
    return AuthorView(id=comment.author_id, name=comment.author_name or UNKNOWN_AUTHOR_NAME)


def _displayed_author(comment: Comment) -> AuthorView:
    if comment.is_anonymous:
        return AuthorView(id=None, name=ANONYMOUS_AUTHOR_NAME)
    return _true_author(comment)


def _is_own(comment: Comment, viewer_id: int) -> bool:
    # Anonymous comments never display as the viewer's own, even to the author.
    if comment.is_anonymous:
        return False
    return comment.author_id is not None and comment.author_id == viewer_id


def member_comment_view(comment: Comment, viewer_id: int) -> MemberCommentView:
    return MemberCommentView(
        id=comment.id,
        comment_text=comment.text,
        documents=comment.documents,
        is_anonymous=comment.is_anonymous,
        steerco_only=comment.steerco_only,
        created_date=comment.created_at,
        last_updated=comment.updated_at,
        author=_displayed_author(comment),
        is_own=_is_own(comment, viewer_id),
    )


def steerco_comment_view(comment: Comment, viewer_id: int, source: CommentSource) -> SteerCoCommentView:
    if source == CommentSource.STEERCO:
        author = _true_author(comment)
        is_own = comment.author_id is not None and comment.author_id == viewer_id
    else:
        author = _displayed_author(comment)
        is_own = _is_own(comment, viewer_id)
    return SteerCoCommentView(
        id=comment.id,
        comment_text=comment.text,
        documents=comment.documents,
        created_date=comment.created_at,
        last_updated=comment.updated_at,
        source=source,
        is_anonymous=comment.is_anonymous if source == CommentSource.MEMBER_STEERCO_ONLY else False,
        author=author,
        is_own=is_own,
    )


def samira_comment_view(comment: Comment) -> SamiraCommentView:
    return SamiraCommentView(
        id=comment.id,
        comment_text=comment.text,
        documents=comment.documents,
        created_date=comment.created_at,
        last_updated=comment.updated_at,
        author=AuthorView(id=None, name=ORGANIZATION_AUTHOR_NAME),
        is_targeted=len(comment.target_member_ids) > 0,
        target_member_count=len(comment.target_member_ids),
    )


def is_samira_visible(comment: Comment, viewer_id: int) -> bool:
    """Broadcast comments are visible to everyone, targeted ones only to targets."""
    if not comment.target_member_ids:
        return True
    return viewer_id in comment.target_member_ids


def member_feed(comments: Iterable[Comment], viewer_id: int) -> list[MemberCommentView]:
    visible = [c for c in comments if not c.steerco_only]
    return [member_comment_view(c, viewer_id) for c in newest_first(visible)]


def steerco_view(
    steerco_comments: Iterable[Comment],
    steerco_only_member_comments: Iterable[Comment],
    viewer_id: int,
) -> list[SteerCoCommentView]:
    """Merge SteerCo-channel comments with steerco-only member comments."""
    views = [steerco_comment_view(c, viewer_id, CommentSource.STEERCO) for c in steerco_comments]
    views.extend(
        steerco_comment_view(c, viewer_id, CommentSource.MEMBER_STEERCO_ONLY)
        for c in steerco_only_member_comments
        if c.steerco_only
    )
    return newest_first(views, created=lambda v: v.created_date)


def samira_feed(comments: Iterable[Comment], viewer_id: int) -> list[SamiraCommentView]:
    visible = [c for c in comments if is_samira_visible(c, viewer_id)]
    return [samira_comment_view(c) for c in newest_first(visible)]
