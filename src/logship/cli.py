"""
Ship lines from standard input to LogDNA.
"""

import argparse
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional, TextIO

from .client import Client
from .config import Config
from .errors import LogShipError

logger = logging.getLogger(__name__)

API_KEY_ENV = "LOGDNA_API_KEY"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logship-stdin",
        description="Send lines read from stdin to LogDNA. "
        f"The ingestion key is read from ${API_KEY_ENV}.",
    )
    parser.add_argument(
        "--hostname",
        default="",
        help="hostname you want logs to appear from in LogDNA viewer",
    )
    parser.add_argument(
        "--log-file-name",
        default="",
        help="log file or app name you want logs to appear as in LogDNA viewer",
    )
    parser.add_argument(
        "--flush-limit",
        type=int,
        default=0,
        help="lines to buffer before sending (default: 5000)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds (default: none)",
    )
    parser.add_argument(
        "--strict-status",
        action="store_true",
        help="treat non-2xx responses from LogDNA as errors",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def load_config(
    argv: Optional[Iterable[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """Build Config from the environment and CLI flags.

    Exits with status 1 when the key, hostname or log file name is missing.
    """
    environ = os.environ if environ is None else environ
    parser = build_parser()
    args = parser.parse_args(None if argv is None else list(argv))

    api_key = environ.get(API_KEY_ENV, "")
    if not api_key:
        print(f"Set {API_KEY_ENV} env var", file=sys.stderr)
        sys.exit(1)

    for flag, value in (
        ("hostname", args.hostname),
        ("log-file-name", args.log_file_name),
    ):
        if not value:
            print(f"Error: {flag} flag is required", file=sys.stderr)
            parser.print_usage(sys.stderr)
            sys.exit(1)

    if args.flush_limit < 0:
        parser.error("--flush-limit must not be negative")

    if args.verbose:
        logging.getLogger("logship").setLevel(logging.DEBUG)

    return Config(
        api_key=api_key,
        hostname=args.hostname,
        log_file=args.log_file_name,
        flush_limit=args.flush_limit,
        timeout=args.timeout,
        strict_status=args.strict_status,
    )


def log_line(client: Client, line: str) -> bool:
    """Log one line, trying once more if the flush it triggers fails.

    The failed batch stays buffered, so the second attempt resends it. If
    that also fails the line is dropped. Returns False when any send failed.
    """
    timestamp = datetime.now(timezone.utc)
    try:
        client.log(timestamp, line)
        return True
    except LogShipError as exc:
        print(f"Error sending logs: {exc}", file=sys.stderr)

    try:
        client.log(timestamp, line)
    except LogShipError as exc:
        print(f"Error sending logs, dropped line: {exc}", file=sys.stderr)
    return False


def ship(client: Client, stream: TextIO) -> int:
    """Log every line of ``stream`` and close the client.

    Send failures are reported and reading continues. Returns the process
    exit status.
    """
    status = 0
    try:
        for raw in stream:
            if not log_line(client, raw.rstrip("\r\n")):
                status = 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error reading from stdin: {exc}", file=sys.stderr)
        status = 1

    try:
        client.close()
    except LogShipError as exc:
        print(f"Error sending logs: {exc}", file=sys.stderr)
        status = 1

    return status


def main(argv: Optional[Iterable[str]] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        stream=sys.stderr,
    )
    config = load_config(argv)

    try:
        client = Client(config)
    except LogShipError as exc:
        logger.error("Cannot start client: %s", exc)
        return 1

    logger.debug(
        "Shipping stdin as %s/%s, flush limit %d",
        config.hostname,
        config.log_file,
        client.flush_limit,
    )
    return ship(client, sys.stdin)


if __name__ == "__main__":
    sys.exit(main())
