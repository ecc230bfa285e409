from __future__ import annotations
from typing import Optional
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict
from fastapi import Request


class AccessLogEvent(BaseModel):
    """
    One access log entry, written to stdout as a single JSON line.

    Recorded when the request arrives, before any handler runs, so the
    entry reflects the request exactly as the client sent it.
    """

    model_config = ConfigDict(extra="forbid")

    # --- core ---
    time: datetime
    remote_addr: Optional[str] = None               # client host, if known
    host: Optional[str] = None                      # Host header

    # --- request line ---
    method: str
    path: str
    proto: str                                      # "HTTP/1.1", "HTTP/2", ...

    # --- client ---
    user_agent: Optional[str] = None

    @classmethod
    def from_request(cls, request: Request) -> "AccessLogEvent":
        client = request.client
        return cls(
            time=datetime.now(timezone.utc),
            remote_addr=f"{client.host}:{client.port}" if client else None,
            host=request.headers.get("host"),
            method=request.method,
            path=request.url.path,
            proto=f"HTTP/{request.scope.get('http_version', '1.1')}",
            user_agent=request.headers.get("user-agent"),
        )
