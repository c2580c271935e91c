"""Request logging middleware."""

import time
from typing import Awaitable, Callable

from fastapi import Request, Response

from civic_reports.utils.logger import get_logger, new_request_id, set_request_id

log = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def logging_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Bind a request id, log the request and its outcome with timing."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
    # Error handlers outside this middleware read it from request state
    request.state.request_id = request_id
    set_request_id(request_id)
    start = time.perf_counter()

    log.info("request started", method=request.method, path=request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        log.exception(
            "request failed",
            method=request.method,
            path=request.url.path,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        raise
    finally:
        set_request_id(None)

    response.headers[REQUEST_ID_HEADER] = request_id
    log.info(
        "request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - start) * 1000, 2),
    )
    return response
