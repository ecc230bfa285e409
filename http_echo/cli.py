from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from http_echo import HUMAN_VERSION
from http_echo.config import DEFAULT_LISTEN, DEFAULT_SERVER_ID, ServerConfig, load_config
from http_echo.errors import ConfigurationError, HttpEchoError
from http_echo.logging_config import configure_logging
from http_echo.server import Lifecycle

logger = logging.getLogger(__name__)

EXIT_VERSION = 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="http-echo",
        description="Echo a fixed string on every request, for routing and canary tests",
    )
    parser.add_argument(
        "-listen",
        "--listen",
        default=DEFAULT_LISTEN,
        help=f"address and port to listen (default: {DEFAULT_LISTEN})",
    )
    parser.add_argument(
        "-id",
        "--id",
        dest="server_id",
        default=DEFAULT_SERVER_ID,
        help=f"server id (default: {DEFAULT_SERVER_ID})",
    )
    parser.add_argument(
        "-delay",
        "--delay",
        type=int,
        default=0,
        help="optional delay in milliseconds to apply to each response (default: 0)",
    )
    parser.add_argument(
        "-version",
        "--version",
        action="store_true",
        help="display version information",
    )
    parser.add_argument("extra", nargs="*", help=argparse.SUPPRESS)
    return parser


def parse_config(args: argparse.Namespace) -> ServerConfig:
    if args.extra:
        raise ConfigurationError("Too many arguments!")
    return load_config(args.listen, args.server_id, args.delay)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        print(HUMAN_VERSION, file=sys.stderr)
        return EXIT_VERSION

    try:
        config = parse_config(args)
    except ConfigurationError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code

    listener = configure_logging()
    try:
        return Lifecycle(config).run()
    except HttpEchoError as exc:
        logger.error("%s", exc)
        return exc.exit_code
    finally:
        listener.stop()
