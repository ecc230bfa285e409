"""Request handlers for the echo and health endpoints."""

from fastapi import Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from http_echo.delay import ResponseDelay
from http_echo.metrics import RequestMetrics

HEALTH_BODY = {"status": "ok"}


class EchoHandler:
    """Answers with the configured text after the delay, counting each request."""

    def __init__(self, text: str, identity: str, delay: ResponseDelay, metrics: RequestMetrics):
        self.body = text + "\n"
        self.identity = identity
        self.delay = delay
        self.metrics = metrics

    async def handle(self, request: Request) -> Response:
        await self.delay.delay()
        self.metrics.increment(self.identity)
        return PlainTextResponse(self.body)


class HealthHandler:
    """Liveness probe; skips the delay and the counter."""

    async def handle(self, request: Request) -> Response:
        return JSONResponse(HEALTH_BODY)
