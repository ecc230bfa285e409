from typing import Mapping, Optional

from fastapi import FastAPI, Request, Response

from http_echo import __version__
from http_echo.config import ServerConfig
from http_echo.delay import ResponseDelay
from http_echo.handlers import EchoHandler, HealthHandler
from http_echo.metrics import RequestMetrics
from http_echo.middleware import AccessLogMiddleware, AppHeadersMiddleware

METRICS_PATH = "/metrics"
HEALTH_PATH = "/health"


def create_app(
    config: ServerConfig,
    metrics: Optional[RequestMetrics] = None,
    app_headers: Optional[Mapping[str, str]] = None,
) -> FastAPI:
    """Build the ASGI application for one server instance."""
    if metrics is None:
        metrics = RequestMetrics()
    metrics.register(config.server_id)

    app = FastAPI(title="http-echo", version=__version__, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.config = config
    app.state.metrics = metrics

    app.add_middleware(AppHeadersMiddleware, headers=app_headers, exempt_paths=[METRICS_PATH])
    app.add_middleware(AccessLogMiddleware, exempt_paths=[METRICS_PATH])

    async def render_metrics(request: Request) -> Response:
        return Response(metrics.render(), media_type=metrics.content_type)

    # Plain Starlette routes with methods=None match every method, PURGE and TRACE included.
    app.add_route(METRICS_PATH, render_metrics, methods=None)
    app.add_route(HEALTH_PATH, HealthHandler().handle, methods=None)

    # Catch-all, so every other path answers with the echo text too.
    echo = EchoHandler(config.echo_text, config.server_id, ResponseDelay(config.delay_ms), metrics)
    app.add_route("/{path:path}", echo.handle, methods=None)

    return app
