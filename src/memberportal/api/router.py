"""Master API router mounted at /api/v1."""

from fastapi import APIRouter
from memberportal.api.routes import (
    comments,
    health,
    linked_tables,
    member,
    samira_comments,
    steerco_comments,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(comments.router)
api_router.include_router(steerco_comments.router)
api_router.include_router(samira_comments.router)
api_router.include_router(member.router)
api_router.include_router(linked_tables.router)
