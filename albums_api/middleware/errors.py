"""
Albums API — Unexpected Error Middleware
=========================================

What:  Turns any exception that escapes a route (other than the
       AlbumServiceError family, which the app's handlers render) into the
       fatal-class 500 response.
How:   Wraps call_next in a try/except and hands the exception to a
       renderer supplied by the app factory.
When:  Runs inside RequestIDMiddleware, so the response carries X-Request-ID
       and the access log records the 500 like any other response.
"""

import logging
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from albums_api.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class UnexpectedErrorMiddleware(BaseHTTPMiddleware):
    """Renders unhandled exceptions with `render` instead of letting them escape."""

    def __init__(self, app, render: Callable[[Exception], Response], **kwargs):
        super().__init__(app, **kwargs)
        self._render = render

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                request_id_var.get(""),
                request.method,
                request.url.path,
                exc,
                exc_info=True,
            )
            return self._render(exc)
