"""
Bloglist Backend — Access Log Middleware
=========================================

What:  One access-log line per request on the `bloglist.access` logger.
Line:  "<METHOD> <path> -> <status> in <ms>ms [<request id>] from <ip>"
Level: 5xx → ERROR, 4xx → WARNING, everything else → INFO.

Never logged: request bodies (passwords) and the Authorization header.
GET /health is skipped.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bloglist.middleware.request_id import request_id_var

logger = logging.getLogger("bloglist.access")

QUIET_PATHS = frozenset({"/health"})


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
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        client = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        logger.log(
            level_for_status(response.status_code),
            "%s %s -> %d in %.1fms [%s] from %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
            client,
            extra={"request_id": rid, "duration_ms": elapsed_ms},
        )
        return response
