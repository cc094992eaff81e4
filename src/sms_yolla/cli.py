from __future__ import annotations

import argparse
import asyncio
import sys

from .config import get_settings
from .logging import configure_logging
from .sender import SmsSender


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sms-yolla", description="Send one SMS via the gateway.")
    parser.add_argument("phone", type=str)
    parser.add_argument("message", type=str)
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="seconds to wait for the gateway; 0 waits indefinitely",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="treat non-2xx gateway responses as failures",
    )
    parser.add_argument(
        "--no-escape",
        action="store_true",
        help="interpolate values into the XML payload without escaping",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    sender = SmsSender.from_settings(get_settings())
    if args.timeout is not None:
        # 0 disables a timeout configured through SMS_TIMEOUT_SECONDS
        sender.timeout = args.timeout or None
    if args.strict:
        sender.treat_http_errors_as_failure = True
    if args.no_escape:
        sender.escape_xml = False

    result = asyncio.run(sender.send(args.phone, args.message))
    if result.ok:
        print(result.raw_response_body)
        return 0

    kind = result.failure_kind.value if result.failure_kind else "unknown"
    print(f"error ({kind}): {result.error}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
