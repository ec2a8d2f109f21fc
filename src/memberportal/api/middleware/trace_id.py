"""Trace ID middleware for request/response propagation."""

import re
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from memberportal.logging_config import bind_request_context, clear_request_context

_VALID_TRACE_ID = re.compile(r"^[A-Za-z0-9_.:-]{1,128}$")


def new_trace_id() -> str:
    return f"trc_{uuid.uuid4().hex[:16]}"


def resolve_trace_id(header_value: str | None) -> str:
    """Reuse a caller-supplied trace id only if it is short and log-safe."""
    if header_value and _VALID_TRACE_ID.match(header_value):
        return header_value
    return new_trace_id()


class TraceIdMiddleware(BaseHTTPMiddleware):
    """Attach a trace id to the request, the log context and the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = resolve_trace_id(request.headers.get("x-trace-id"))
        request.state.trace_id = trace_id
        bind_request_context(trace_id)

        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers["X-Trace-Id"] = trace_id
        return response
