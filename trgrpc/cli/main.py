"""Command-line entry point: perform one RPC call and print the raw payload.

Examples:
    trgrpc '{"method": "session-get"}'
    echo '{"method": "torrent-get", "arguments": {"fields": ["id"]}}' | trgrpc --url http://nas:9091/transmission/rpc -
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO

from dotenv import load_dotenv

from trgrpc.cli.output import print_error, print_info
from trgrpc.client import TrgClient
from trgrpc.config.loader import load_config
from trgrpc.config.schema import Config
from trgrpc.core.errors import ConfigError
from trgrpc.core.redaction import redact_secrets
from trgrpc.http.status import HttpFailure, TransportFailure
from trgrpc.logging_setup import configure_http_logging, configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_HTTP_ERROR = 1
EXIT_TRANSPORT_ERROR = 2
EXIT_CONFIG_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="trgrpc",
        description="Send one request to a Transmission RPC endpoint",
    )
    parser.add_argument(
        "body",
        nargs="?",
        default="-",
        help="Request body to send verbatim ('-' or omitted reads stdin)",
    )
    parser.add_argument("--url", help="Full RPC endpoint URL (overrides host/port from config)")
    parser.add_argument("--username", "-u", help="HTTP Basic username")
    parser.add_argument("--password", help="HTTP Basic password (prefer TRGRPC_PASSWORD)")
    parser.add_argument(
        "--ssl",
        action="store_true",
        default=None,
        help="Use https without certificate verification",
    )
    parser.add_argument("--proxy", help="HTTP proxy URL")
    parser.add_argument("--timeout", type=float, help="Per-attempt timeout in seconds")
    parser.add_argument("--config", type=Path, help="Explicit config file (skips layered lookup)")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging, including httpx wire traces",
    )
    return parser


def build_client(args: argparse.Namespace, config: Config) -> TrgClient:
    """Combine config with command-line overrides."""
    overrides = {
        key: value
        for key, value in (
            ("username", args.username),
            ("password", args.password),
            ("ssl", args.ssl),
            ("proxy", args.proxy),
            ("timeout", args.timeout),
        )
        if value is not None
    }
    connection = config.connection.model_validate(
        {**config.connection.model_dump(), **overrides}
    )
    if args.url:
        return TrgClient(
            url=args.url,
            username=connection.username,
            password=connection.password,
            ssl=connection.ssl or args.url.startswith("https://"),
            proxy=connection.proxy,
            timeout=connection.timeout,
            user_agent=connection.user_agent,
        )
    return TrgClient.from_config(connection)


def read_body(arg: str, stdin: BinaryIO | None = None) -> bytes:
    if arg == "-":
        return (stdin if stdin is not None else sys.stdin.buffer).read()
    return arg.encode("utf-8")


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)
    load_dotenv()

    try:
        config = load_config(path=args.config)
    except ConfigError as e:
        print_error(f"Configuration error: {e.message}")
        return EXIT_CONFIG_ERROR

    level = "DEBUG" if args.verbose else config.logging.level
    log_file = Path(config.logging.file).expanduser() if config.logging.file else None
    configure_logging(level, log_file)
    if args.verbose:
        configure_http_logging()

    try:
        client = build_client(args, config)
    except ValueError as e:
        print_error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    body = read_body(args.body)
    logger.debug("Sending %d-byte request to %s", len(body), redact_secrets(client.url))

    with client.perform(body) as response:
        status = response.status
        if isinstance(status, TransportFailure):
            print_error(str(status))
            return EXIT_TRANSPORT_ERROR
        if isinstance(status, HttpFailure):
            print_error(str(status))
            if response.payload:
                print_info(response.payload.decode("utf-8", errors="replace"))
            return EXIT_HTTP_ERROR

        sys.stdout.buffer.write(response.payload or b"")
        sys.stdout.buffer.flush()
    return EXIT_OK


def main() -> None:
    """Console script entry point."""
    sys.exit(run())
