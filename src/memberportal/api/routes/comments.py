"""Member discussion routes for a deal."""

from fastapi import APIRouter

from memberportal.dependencies import CurrentMember, DealId, Discussion, parse_row_id
from memberportal.models.common import MessageResponse
from memberportal.models.comment import CommentUpdate, MemberCommentCreate
from memberportal.models.enums import Channel

router = APIRouter(tags=["Comments"])


@router.get("/deals/{deal_id}/comments")
async def list_member_comments(viewer: CurrentMember, deal: DealId, discussion: Discussion) -> dict:
    """Public feed for the deal; steerco-only comments are excluded."""
    comments = await discussion.list_visible(Channel.MEMBER, deal, viewer)
    is_steerco = await discussion.is_member_on_steerco(deal, viewer)
    return {
        "success": True,
        "comments": [c.model_dump(mode="json", by_alias=True) for c in comments],
        "count": len(comments),
        "isSteerCo": is_steerco,
    }


@router.post("/deals/{deal_id}/comments", status_code=201)
async def create_member_comment(
    body: MemberCommentCreate,
    viewer: CurrentMember,
    deal: DealId,
    discussion: Discussion,
) -> dict:
    comment = await discussion.create(Channel.MEMBER, deal, viewer, body)
    return {"success": True, "comment": comment.model_dump(mode="json", by_alias=True)}


@router.patch("/deals/{deal_id}/comments/{comment_id}")
async def update_member_comment(
    comment_id: str,
    body: CommentUpdate,
    viewer: CurrentMember,
    deal: DealId,
    discussion: Discussion,
) -> dict:
    comment = await discussion.update(Channel.MEMBER, deal, parse_row_id(comment_id), viewer, body.comment_text)
    return {"success": True, "comment": comment.model_dump(mode="json", by_alias=True)}


@router.delete("/deals/{deal_id}/comments/{comment_id}")
async def delete_member_comment(
    comment_id: str,
    viewer: CurrentMember,
    deal: DealId,
    discussion: Discussion,
) -> MessageResponse:
    await discussion.soft_delete(Channel.MEMBER, deal, parse_row_id(comment_id), viewer)
    return MessageResponse(message="Comment deleted")
