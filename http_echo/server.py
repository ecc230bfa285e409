"""
Server lifecycle.

uvicorn runs on a background thread while the main thread waits for an
interrupt. The first interrupt stops the accept loop and gives in-flight
requests a bounded grace period; uvicorn cancels whatever is still running
when it expires. An interrupted server always exits with EXIT_INTERRUPTED.
"""

import enum
import logging
import signal
import threading
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI

from http_echo.app import create_app
from http_echo.config import ServerConfig
from http_echo.errors import BindError, ListenerError

logger = logging.getLogger(__name__)

SHUTDOWN_GRACE_PERIOD = 5.0
EXIT_INTERRUPTED = 2

_POLL_INTERVAL = 0.1


class State(enum.Enum):
    STARTING = "starting"
    LISTENING = "listening"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class Lifecycle:
    def __init__(
        self,
        config: ServerConfig,
        app: Optional[FastAPI] = None,
        grace_period: float = SHUTDOWN_GRACE_PERIOD,
    ):
        self.config = config
        self.app = app if app is not None else create_app(config)
        self.grace_period = grace_period
        self.state = State.STARTING

        self.shutdown_requested = threading.Event()
        self._server = uvicorn.Server(
            uvicorn.Config(
                self.app,
                host=config.host,
                port=config.port,
                access_log=False,
                log_config=None,
                timeout_graceful_shutdown=grace_period,
            )
        )
        self._thread = threading.Thread(target=self._serve, name="http-echo-listener", daemon=True)
        self._error: Optional[BaseException] = None

    def _serve(self) -> None:
        try:
            self._server.run()
        except (Exception, SystemExit) as exc:
            # uvicorn reports a failed bind with sys.exit(1).
            self._error = exc

    def start(self) -> None:
        """Start listening; returns once the socket is bound."""
        self._thread.start()
        while not self._server.started:
            if not self._thread.is_alive():
                raise BindError(f"failed to listen on {self.config.listen}: {self._error!r}")
            self._thread.join(_POLL_INTERVAL)
        self.state = State.LISTENING
        logger.info("server is listening on %s", self.config.listen)

    def interrupt(self, signum: Optional[int] = None, frame=None) -> None:
        """Request shutdown. Only the first call has any effect."""
        if self.shutdown_requested.is_set():
            return
        logger.info("received interrupt, shutting down...")
        self.shutdown_requested.set()

    def install_signal_handlers(self) -> None:
        signal.signal(signal.SIGINT, self.interrupt)

    def wait(self) -> int:
        """Block until interrupted, drain, and return the exit status."""
        while not self.shutdown_requested.wait(_POLL_INTERVAL):
            if not self._thread.is_alive():
                self.state = State.STOPPED
                raise ListenerError(f"server exited with: {self._error or 'listener stopped'}")

        self.state = State.SHUTTING_DOWN
        self._server.should_exit = True
        drain_started = time.monotonic()
        # uvicorn enforces the grace period; the extra second covers its own teardown.
        self._thread.join(self.grace_period + 1)
        if time.monotonic() - drain_started >= self.grace_period:
            logger.info(
                "shutdown deadline of %.1fs exceeded, remaining requests were cut off",
                self.grace_period,
            )
        if self._thread.is_alive():
            logger.warning("listener still running after %.1fs grace period", self.grace_period)
        elif self._error is not None:
            logger.info("listener stopped with %r during shutdown", self._error)
        self.state = State.STOPPED
        logger.info("server stopped")
        return EXIT_INTERRUPTED

    def run(self) -> int:
        self.install_signal_handlers()
        self.start()
        return self.wait()
