"""Logging setup.

Records go through a queue so request handlers never wait on stream
writes. The listener thread owns the real handlers and must be stopped
before exit to flush whatever is still queued.
"""

import logging
import logging.handlers
import queue
import sys

ACCESS_LOGGER = "http_echo.access"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class _AccessOnly(logging.Filter):
    def __init__(self, accept: bool):
        super().__init__()
        self.accept = accept

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name.startswith(ACCESS_LOGGER) == self.accept


def configure_logging(level: int = logging.INFO) -> logging.handlers.QueueListener:
    """Route all logging through a queue; access lines to stdout, the rest to stderr."""
    log_queue: "queue.SimpleQueue[logging.LogRecord]" = queue.SimpleQueue()

    app_handler = logging.StreamHandler(sys.stderr)
    app_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    app_handler.addFilter(_AccessOnly(False))

    access_handler = logging.StreamHandler(sys.stdout)
    access_handler.setFormatter(logging.Formatter("%(message)s"))
    access_handler.addFilter(_AccessOnly(True))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(logging.handlers.QueueHandler(log_queue))
    root.setLevel(level)

    listener = logging.handlers.QueueListener(
        log_queue, app_handler, access_handler, respect_handler_level=True
    )
    listener.start()
    return listener
