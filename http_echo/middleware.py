"""
Middleware wrapped around the echo and health handlers.

Starlette runs the most recently added middleware first, so the app
factory adds AppHeadersMiddleware before AccessLogMiddleware to get
access logging -> header injection -> handler.
"""

import logging
from typing import Iterable, Mapping, Optional

from fastapi import Request, Response
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from http_echo import __version__
from http_echo.events import AccessLogEvent
from http_echo.logging_config import ACCESS_LOGGER

logger = logging.getLogger(__name__)
access_logger = logging.getLogger(ACCESS_LOGGER)

DEFAULT_APP_HEADERS = {
    "X-App-Name": "http-echo",
    "X-App-Version": __version__,
}


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Write one JSON access line per request, as soon as it arrives."""

    def __init__(self, app: ASGIApp, exempt_paths: Iterable[str] = ()):
        super().__init__(app)
        self.exempt_paths = frozenset(exempt_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path not in self.exempt_paths:
            access_logger.info(AccessLogEvent.from_request(request).model_dump_json())
        return await call_next(request)


class AppHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp the identifying headers on every response, error responses included."""

    def __init__(
        self,
        app: ASGIApp,
        headers: Optional[Mapping[str, str]] = None,
        exempt_paths: Iterable[str] = (),
    ):
        super().__init__(app)
        self.headers = dict(DEFAULT_APP_HEADERS if headers is None else headers)
        self.exempt_paths = frozenset(exempt_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("handler failed for %s %s", request.method, request.url.path)
            response = PlainTextResponse("Internal Server Error", status_code=500)
        response.headers.update(self.headers)
        return response
