"""Current member's profile: read and reconciled update."""

from typing import Any

from fastapi import APIRouter, Body

from memberportal.dependencies import CurrentMember, Profiles

router = APIRouter(tags=["Member"])


@router.get("/member")
async def get_member(viewer: CurrentMember, profiles: Profiles) -> dict:
    member = await profiles.get_profile(viewer.member_id)
    return {"success": True, "member": member}


@router.patch("/member")
async def update_member(
    viewer: CurrentMember,
    profiles: Profiles,
    patch: dict[str, Any] = Body(...),
) -> dict:
    result = await profiles.update_profile(viewer.member_id, patch)
    if not result.has_changes:
        return {"success": True, "message": "No changes detected", "member": result.member}
    return {
        "success": True,
        "message": "Profile updated successfully",
        "member": result.member,
        "changedFields": len(result.changed_fields),
    }
