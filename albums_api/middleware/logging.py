"""
Albums API — Request Logging Middleware
========================================

What:  One access-log line per album request.
How:   Times the rest of the stack, then reads what the router resolved
       (handler name and the {id} path segment) from the shared ASGI scope.
When:  Runs inside RequestIDMiddleware so the request ID is already set.

Line format:
    <METHOD> <path> -> <status> <ms>ms [<request id>] handler=<name> album_id=<id>

    GET /albums/3 -> 200 1.4ms [a1b2c3d4] handler=get_album album_id=3
    POST /albumsCreate -> 400 0.6ms [5e6f7a8b] handler=create_album_via_url album_id=-

Request bodies and query strings are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from albums_api.middleware.request_id import request_id_var

logger = logging.getLogger("albums_api.access")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs which album handler served each request, and how."""

    # Polled by orchestrators
    EXCLUDED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        # The router fills these in on the scope it shares with us
        endpoint = request.scope.get("endpoint")
        handler = getattr(endpoint, "__name__", "-")
        album_id = request.scope.get("path_params", {}).get("album_id", "-")
        rid = request_id_var.get("")

        logger.log(
            _level_for(response.status_code),
            "%s %s -> %d %.1fms [%s] handler=%s album_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
            handler,
            album_id,
            extra={
                "request_id": rid,
                "handler": handler,
                "album_id": album_id,
                "status": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )
        return response
