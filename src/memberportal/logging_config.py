"""Structured logging configuration using structlog.

Standard-library loggers (``logging.getLogger(__name__)``) are routed through
structlog's ProcessorFormatter so every record carries the request context
bound by the trace middleware and the member dependency.
"""

import logging
import sys
from typing import Any

import structlog

# Keys whose values must never reach a log sink (store token, session JWT)
_SENSITIVE_KEYS = frozenset({"authorization", "api_key", "baserow_api_key", "jwt_secret", "token"})
_REDACTED = "***"

_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine")


def redact_sensitive(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask credential-bearing keys in the event dict."""
    for key in list(event_dict):
        if key.lower() in _SENSITIVE_KEYS and event_dict[key]:
            event_dict[key] = _REDACTED
    return event_dict


def configure_logging(log_level: str = "info", json_output: bool = False) -> None:
    """Configure structlog and the root logger.

    Args:
        log_level: Logging level string (debug/info/warning/error).
        json_output: JSON lines when True (deployed), colored console otherwise.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        redact_sensitive,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        final_processors = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        final_processors = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *final_processors],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # httpx logs every record store request at INFO
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_request_context(trace_id: str, member_id: int | None = None, deal_id: int | None = None) -> None:
    """Bind the trace id and, once known, the member and deal to the async context."""
    ctx: dict[str, Any] = {"trace_id": trace_id}
    if member_id is not None:
        ctx["member_id"] = member_id
    if deal_id is not None:
        ctx["deal_id"] = deal_id
    structlog.contextvars.bind_contextvars(**ctx)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
