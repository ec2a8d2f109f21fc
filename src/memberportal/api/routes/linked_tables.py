"""Option lists for the linked-record fields of the profile form."""

from fastapi import APIRouter, Query

from memberportal.dependencies import CurrentMember, Profiles
from memberportal.models.member import LinkedOption

router = APIRouter(tags=["Linked Tables"])


@router.get("/linked-tables", response_model=list[LinkedOption])
async def list_linked_options(
    viewer: CurrentMember,
    profiles: Profiles,
    table_id: int = Query(..., alias="tableId", gt=0),
    display_field: str | None = Query(None, alias="displayField"),
) -> list[LinkedOption]:
    return await profiles.linked_options(table_id, display_field)
