"""Error types raised by http-echo."""


class HttpEchoError(RuntimeError):
    """Base class for errors that end the process."""

    exit_code = 1


class ConfigurationError(HttpEchoError):
    """Bad command line arguments or invalid configuration values."""

    exit_code = 127


class BindError(HttpEchoError):
    """The listener could not bind its address."""


class ListenerError(HttpEchoError):
    """The listener stopped without being asked to."""
