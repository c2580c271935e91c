"""Structured logging built on structlog."""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Optional

import structlog
import structlog.typing

_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def configure_logging(log_level: str = "INFO", debug: bool = False) -> None:
    """Configure structlog and the stdlib root logger once at startup."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if debug
        else structlog.processors.JSONRenderer(ensure_ascii=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """Return a logger bound to the module name."""
    return structlog.get_logger(logger_name=name)


def new_request_id() -> str:
    return uuid.uuid4().hex


def set_request_id(request_id: Optional[str]) -> None:
    """Bind the request id for the current context (None clears it)."""
    _request_id.set(request_id)
    if request_id is None:
        structlog.contextvars.unbind_contextvars("request_id")
    else:
        structlog.contextvars.bind_contextvars(request_id=request_id)


def get_request_id() -> Optional[str]:
    return _request_id.get()


def truncate(value: Optional[str], max_length: int = 200) -> Optional[str]:
    """Shorten long strings for log output."""
    if value is None or len(value) <= max_length:
        return value
    return value[:max_length] + "..."
