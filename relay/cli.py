"""Command-line entry point: `session-relay [host] [port]`."""

from __future__ import annotations

import sys
import argparse
import dataclasses

import uvicorn

from relay.server import create_app
from relay.state.settings import AppSettings
from relay.runtime.settings import load_settings
from relay.config.server import DEFAULT_HOST, DEFAULT_PORT


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        return DEFAULT_PORT
    if port <= 0 or port > 65535:
        return DEFAULT_PORT
    return port


def resolve_address(address: list[str], *, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> tuple[str, int]:
    """Map positional args to (host, port).

    No args keeps the defaults, one arg is a port, two args are host and port.
    An unparsable port falls back to the default port.
    """
    if len(address) == 0:
        return host, port
    if len(address) == 1:
        return host, _parse_port(address[0])
    if len(address) == 2:
        return address[0], _parse_port(address[1])
    raise ValueError("expected at most two arguments: [host] [port]")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="session-relay",
        description="WebSocket relay: hosts create sessions, clients join them, Params updates fan out to members.",
    )
    parser.add_argument("address", nargs="*", metavar="ADDRESS", help="[host] [port] (default 127.0.0.1 4000)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings: AppSettings = load_settings()
    try:
        host, port = resolve_address(args.address, host=settings.server.host, port=settings.server.port)
    except ValueError:
        parser.print_usage(sys.stderr)
        return 2

    settings = dataclasses.replace(settings, server=dataclasses.replace(settings.server, host=host, port=port))

    # log_config=None keeps the logging set up by relay.runtime.logging.
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)
    return 0


__all__ = ["main", "resolve_address"]
