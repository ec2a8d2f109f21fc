"""Repository for portal users and their member link."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from memberportal.db.models.portal_user import PortalUserRow


class PortalUserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: str) -> PortalUserRow | None:
        return await self.session.get(PortalUserRow, user_id)

    async def get_by_email(self, email: str) -> PortalUserRow | None:
        """Case-insensitive email lookup."""
        stmt = select(PortalUserRow).where(func.lower(PortalUserRow.email) == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(
        self,
        user_id: str,
        email: str,
        display_name: str | None = None,
        member_id: int | None = None,
    ) -> PortalUserRow:
        user = PortalUserRow(user_id=user_id, email=email, display_name=display_name, member_id=member_id)
        self.session.add(user)
        await self.session.flush()
        return user

    async def link_member(self, user: PortalUserRow, member_id: int) -> PortalUserRow:
        user.member_id = member_id
        user.is_active = True
        await self.session.flush()
        return user
