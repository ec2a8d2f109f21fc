"""Samira (CEO) comment routes: targeted or broadcast, administrators write."""

from fastapi import APIRouter

from memberportal.dependencies import CurrentMember, DealId, Discussion, parse_row_id
from memberportal.models.common import MessageResponse
from memberportal.models.comment import CommentUpdate, SamiraCommentCreate
from memberportal.models.enums import Channel

router = APIRouter(tags=["Samira Comments"])


@router.get("/deals/{deal_id}/samira-comments")
async def list_samira_comments(viewer: CurrentMember, deal: DealId, discussion: Discussion) -> dict:
    comments = await discussion.list_visible(Channel.SAMIRA, deal, viewer)
    return {
        "success": True,
        "comments": [c.model_dump(mode="json", by_alias=True) for c in comments],
        "count": len(comments),
    }


@router.post("/deals/{deal_id}/samira-comments", status_code=201)
async def create_samira_comment(
    body: SamiraCommentCreate,
    viewer: CurrentMember,
    deal: DealId,
    discussion: Discussion,
) -> dict:
    comment = await discussion.create(Channel.SAMIRA, deal, viewer, body)
    return {"success": True, "comment": comment.model_dump(mode="json", by_alias=True)}


@router.patch("/deals/{deal_id}/samira-comments/{comment_id}")
async def update_samira_comment(
    comment_id: str,
    body: CommentUpdate,
    viewer: CurrentMember,
    deal: DealId,
    discussion: Discussion,
) -> dict:
    comment = await discussion.update(Channel.SAMIRA, deal, parse_row_id(comment_id), viewer, body.comment_text)
    return {"success": True, "comment": comment.model_dump(mode="json", by_alias=True)}


@router.delete("/deals/{deal_id}/samira-comments/{comment_id}")
async def delete_samira_comment(
    comment_id: str,
    viewer: CurrentMember,
    deal: DealId,
    discussion: Discussion,
) -> MessageResponse:
    await discussion.soft_delete(Channel.SAMIRA, deal, parse_row_id(comment_id), viewer)
    return MessageResponse(message="Comment deleted")
