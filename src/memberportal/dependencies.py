"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from memberportal.comments.authorization import AdminDirectory
from memberportal.comments.service import DiscussionService
from memberportal.errors.exceptions import AuthenticationError, ValidationError
from memberportal.logging_config import bind_request_context
from memberportal.models.member import Viewer
from memberportal.profile.service import ProfileService
from memberportal.repositories.portal_user_repo import PortalUserRepository
from memberportal.store.base import RecordStore


async def get_db(request: Request) -> AsyncGenerator:
    """Yield a database session from the app's session factory."""
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


def get_trace_id(request: Request) -> str:
    """Extract trace_id from request state (set by middleware)."""
    return getattr(request.state, "trace_id", "unknown")


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_admin_directory(request: Request) -> AdminDirectory:
    return request.app.state.admin_directory


def get_discussion_service(
    store: RecordStore = Depends(get_record_store),
    admin_directory: AdminDirectory = Depends(get_admin_directory),
) -> DiscussionService:
    return DiscussionService(store, admin_directory)


def get_profile_service(store: RecordStore = Depends(get_record_store)) -> ProfileService:
    return ProfileService(store)


async def get_current_user(request: Request) -> dict:
    """Return the authenticated user dict or raise 401."""
    user = getattr(request.state, "user", {}) or {}
    if "_auth_error" in user:
        raise AuthenticationError(user["_auth_error"])
    if user.get("sub") in (None, "anonymous", ""):
        raise AuthenticationError("Authentication required")
    return user


async def get_current_member(
    request: Request,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Viewer:
    """Resolve the session to a portal user linked to a member record."""
    portal_user = await PortalUserRepository(db).get(user["sub"])
    if portal_user is None or not portal_user.is_active:
        raise AuthenticationError("Unknown portal user")
    if portal_user.member_id is None:
        raise AuthenticationError("Member record not linked")

    bind_request_context(get_trace_id(request), member_id=portal_user.member_id)
    return Viewer(
        member_id=portal_user.member_id,
        user_id=portal_user.user_id,
        email=portal_user.email or user.get("email", ""),
        name=portal_user.display_name,
    )


def parse_row_id(raw: str, label: str = "ID") -> int:
    """Parse a path identifier as a positive integer row id."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label}") from None
    if value <= 0:
        raise ValidationError(f"Invalid {label}")
    return value


def get_deal_id(request: Request, deal_id: str) -> int:
    """Parse the deal path segment and add it to the log context."""
    deal = parse_row_id(deal_id, "deal ID")
    bind_request_context(get_trace_id(request), deal_id=deal)
    return deal


# Type aliases for dependency injection
CurrentMember = Annotated[Viewer, Depends(get_current_member)]
Discussion = Annotated[DiscussionService, Depends(get_discussion_service)]
Profiles = Annotated[ProfileService, Depends(get_profile_service)]
DealId = Annotated[int, Depends(get_deal_id)]
