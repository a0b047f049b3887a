"""
GuestNotes Backend — Access Log Middleware
============================================

What:  One log line per /notes request: method, path, status, duration.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Never logged: request bodies (note text) and the raw X-ANON-ID header.
Owner identifiers only appear truncated, in NoteService's own log lines.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("guestnotes.access")

# Probes are polled every few seconds
QUIET_PATHS = frozenset({"/", "/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        logger.log(
            level_for_status(response.status_code),
            "[%s] %s %s → %d (%.1fms)",
            rid,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
