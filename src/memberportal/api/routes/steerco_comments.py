"""Steering committee discussion routes for a deal."""

from fastapi import APIRouter

from memberportal.dependencies import CurrentMember, DealId, Discussion, parse_row_id
from memberportal.models.common import MessageResponse
from memberportal.models.comment import CommentUpdate, SteerCoCommentCreate
from memberportal.models.enums import Channel

router = APIRouter(tags=["SteerCo Comments"])


@router.get("/deals/{deal_id}/steerco-comments")
async def list_steerco_comments(viewer: CurrentMember, deal: DealId, discussion: Discussion) -> dict:
    """Merged SteerCo view; members not on the committee get an empty list."""
    is_steerco, comments = await discussion.steerco_listing(deal, viewer)
    return {
        "success": True,
        "comments": [c.model_dump(mode="json", by_alias=True) for c in comments],
        "count": len(comments),
        "isSteerCo": is_steerco,
    }


@router.post("/deals/{deal_id}/steerco-comments", status_code=201)
async def create_steerco_comment(
    body: SteerCoCommentCreate,
    viewer: CurrentMember,
    deal: DealId,
    discussion: Discussion,
) -> dict:
    comment = await discussion.create(Channel.STEERCO, deal, viewer, body)
    return {"success": True, "comment": comment.model_dump(mode="json", by_alias=True)}


@router.patch("/deals/{deal_id}/steerco-comments/{comment_id}")
async def update_steerco_comment(
    comment_id: str,
    body: CommentUpdate,
    viewer: CurrentMember,
    deal: DealId,
    discussion: Discussion,
) -> dict:
    comment = await discussion.update(Channel.STEERCO, deal, parse_row_id(comment_id), viewer, body.comment_text)
    return {"success": True, "comment": comment.model_dump(mode="json", by_alias=True)}


@router.delete("/deals/{deal_id}/steerco-comments/{comment_id}")
async def delete_steerco_comment(
    comment_id: str,
    viewer: CurrentMember,
    deal: DealId,
    discussion: Discussion,
) -> MessageResponse:
    await discussion.soft_delete(Channel.STEERCO, deal, parse_row_id(comment_id), viewer)
    return MessageResponse(message="Comment deleted")
