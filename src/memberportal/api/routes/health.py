"""Liveness and readiness endpoints (unauthenticated)."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from memberportal.store.baserow import BaserowClient

router = APIRouter()

SERVICE_NAME = "member-portal"
SERVICE_VERSION = "0.1.0"


def _record_store_status(store) -> str:
    if store is None:
        return "missing"
    if isinstance(store, BaserowClient) and not store.api_key:
        return "no_api_key"
    return "configured"


@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/health/live")
async def liveness():
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness(request: Request):
    """Ready when the portal user database answers and the record store is usable.

    The store is not called; only its configuration is checked.
    """
    checks: dict[str, str] = {}

    try:
        async with request.app.state.db_session_factory() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as exc:
        checks["database"] = f"error: {exc}"

    checks["record_store"] = _record_store_status(getattr(request.app.state, "record_store", None))

    ready = checks["database"] == "ok" and checks["record_store"] == "configured"
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ready" if ready else "not_ready", "checks": checks},
    )
