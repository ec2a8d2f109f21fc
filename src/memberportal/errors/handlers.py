"""FastAPI exception handlers producing the ErrorResponse envelope."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from memberportal.errors.exceptions import AuthorizationError, PortalError, UpstreamError, ValidationError
from memberportal.models.common import ErrorDetail, ErrorResponse
from memberportal.store.base import RecordStoreError

logger = logging.getLogger(__name__)


def _error_response(request: Request, exc: PortalError) -> JSONResponse:
    trace_id = getattr(request.state, "trace_id", "unknown")
    error_response = ErrorResponse(
        error=ErrorDetail(
            code=exc.code,
            message=exc.message,
            details=exc.details,
            trace_id=trace_id,
            timestamp=datetime.now(timezone.utc),
        ),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app."""

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        if isinstance(exc, AuthorizationError):
            user = getattr(request.state, "user", {}) or {}
            logger.warning(
                "comment_access_denied",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "trace_id": getattr(request.state, "trace_id", "unknown"),
                    "user_sub": user.get("sub", "anonymous"),
                    "reason": str(exc),
                },
            )
        return _error_response(request, exc)

    @app.exception_handler(RecordStoreError)
    async def record_store_error_handler(request: Request, exc: RecordStoreError):
        logger.error(
            "Record store failure on %s %s: %s (status=%s)",
            request.method,
            request.url.path,
            exc,
            exc.status_code,
        )
        return _error_response(request, UpstreamError(details={"store_status": exc.status_code}))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return _error_response(request, ValidationError("Invalid request body", details=details))
