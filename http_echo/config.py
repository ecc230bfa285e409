from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from http_echo.errors import ConfigurationError

DEFAULT_LISTEN = ":5678"
DEFAULT_SERVER_ID = "1"
ANY_HOST = "0.0.0.0"


def split_listen_address(listen: str) -> Tuple[str, int]:
    """
    Split a ``host:port`` listen address.

    An empty host (``":5678"``) binds every interface. IPv6 hosts are
    written in brackets (``"[::1]:5678"``).
    """
    host, sep, port = listen.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address {listen!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"invalid port {port!r} in address {listen!r}") from None
    if not 0 <= port_number <= 65535:
        raise ValueError(f"port {port_number} out of range in address {listen!r}")
    return host or ANY_HOST, port_number


class ServerConfig(BaseModel):
    """
    Startup configuration of one http-echo instance.

    Built once from the command line and never changed afterwards.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    listen: str = DEFAULT_LISTEN
    server_id: str = DEFAULT_SERVER_ID
    delay_ms: int = Field(0, ge=0, description="Milliseconds to wait before each echo")

    @field_validator("listen")
    @classmethod
    def _check_listen(cls, value: str) -> str:
        split_listen_address(value)
        return value

    @property
    def host(self) -> str:
        return split_listen_address(self.listen)[0]

    @property
    def port(self) -> int:
        return split_listen_address(self.listen)[1]

    @property
    def echo_text(self) -> str:
        return f"Port: {self.listen}, id: {self.server_id}"


def load_config(listen: str, server_id: str, delay_ms: int) -> ServerConfig:
    """Validate raw flag values, turning pydantic errors into ConfigurationError."""
    try:
        return ServerConfig(listen=listen, server_id=server_id, delay_ms=delay_ms)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigurationError(f"invalid configuration: {problems}") from exc
